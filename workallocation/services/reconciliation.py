"""Reconciliation of locally authored taxonomy entries against FRAC.

Best-effort: a failure on one role, competency list or position is
logged and recorded in the ReconciliationReport, and the remaining
entries are still processed. The caller decides whether a report with
warnings is acceptable.
"""

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from workallocation.clients.frac import FracClient
from workallocation.models.work_allocation import ChildNode, WorkAllocation

logger = logging.getLogger(__name__)

PROVENANCE_FIELDS = (
    "submitted_from_id",
    "submitted_from_name",
    "submitted_from_email",
    "submitted_to_id",
    "submitted_to_name",
    "submitted_to_email",
)


class WarningKind(StrEnum):
    ROLE = "ROLE"
    COMPETENCY = "COMPETENCY"
    POSITION = "POSITION"


@dataclass(frozen=True)
class ReconciliationWarning:
    kind: WarningKind
    position: int  # index in role_competency_list, -1 for the allocation itself
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}[{self.position}]: {self.message}"


@dataclass
class ReconciliationReport:
    warnings: list[ReconciliationWarning] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.warnings

    def warn(self, kind: WarningKind, position: int, message: str) -> None:
        self.warnings.append(ReconciliationWarning(kind, position, message))


def carry_provenance(submitted: list[ChildNode], returned: list[ChildNode]) -> None:
    """Copy review hand-off fields from submitted nodes onto returned nodes.

    A returned node takes the fields of the submitted node with the same
    id, or failing that the first unclaimed submitted node with the same
    description. Each submitted node is claimed at most once.
    """
    unclaimed = list(range(len(submitted)))
    by_description: list[ChildNode] = []

    for node in returned:
        match = next(
            (i for i in unclaimed if node.id and submitted[i].id == node.id), None,
        )
        if match is None:
            by_description.append(node)
            continue
        _copy_provenance(submitted[match], node)
        unclaimed.remove(match)

    for node in by_description:
        if not node.description:
            continue
        match = next(
            (i for i in unclaimed if submitted[i].description == node.description), None,
        )
        if match is not None:
            _copy_provenance(submitted[match], node)
            unclaimed.remove(match)


def _copy_provenance(source: ChildNode, target: ChildNode) -> None:
    for name in PROVENANCE_FIELDS:
        setattr(target, name, getattr(source, name))


class TaxonomyReconciler:
    """Brings an allocation's roles, competencies and position in line with FRAC."""

    def __init__(self, frac_client: FracClient) -> None:
        self._frac = frac_client

    async def reconcile(self, auth_token: str, allocation: WorkAllocation) -> ReconciliationReport:
        report = ReconciliationReport()
        if allocation.role_competency_list:
            await self.verify_role_activity(auth_token, allocation, report)
            await self.verify_competency_details(auth_token, allocation, report)
        if not allocation.position_id and allocation.user_position:
            await self.attach_position(auth_token, allocation, report)
        return report

    async def verify_role_activity(
        self, auth_token: str, allocation: WorkAllocation, report: ReconciliationReport,
    ) -> None:
        """Create unknown roles and activities in FRAC.

        A role without an id is created with its activities. A FRAC role is
        resubmitted only when one of its activities has no id; otherwise it
        is left untouched.
        """
        for position, entry in enumerate(allocation.role_competency_list):
            old_role = entry.role_details
            if old_role is None:
                continue
            try:
                if not old_role.id:
                    new_role = await self._frac.create_role(auth_token, old_role)
                    carry_provenance(old_role.child_nodes, new_role.child_nodes)
                    entry.role_details = new_role
                elif any(not child.id for child in old_role.child_nodes):
                    new_role = await self._frac.create_role(auth_token, old_role)
                    children = list(new_role.child_nodes)
                    carry_provenance(old_role.child_nodes, children)
                    old_role.child_nodes = children
            except Exception as exc:
                logger.exception("Failed to add role / activity %r", old_role.name)
                report.warn(WarningKind.ROLE, position, f"role {old_role.name!r} not reconciled: {exc}")

    async def verify_competency_details(
        self, auth_token: str, allocation: WorkAllocation, report: ReconciliationReport,
    ) -> None:
        """Replace each competency list with FRAC's, unless FRAC dropped entries."""
        for position, entry in enumerate(allocation.role_competency_list):
            requested = entry.competency_details
            if not requested:
                continue
            try:
                reconciled = await self._frac.reconcile_competencies(auth_token, requested)
            except Exception as exc:
                logger.exception("Failed to reconcile competencies for entry %d", position)
                report.warn(WarningKind.COMPETENCY, position, f"competencies not reconciled: {exc}")
                continue

            if len(reconciled) == len(requested):
                entry.competency_details = reconciled
            else:
                logger.error(
                    "Failed to create FRAC competency / competency level. "
                    "Old list size: %d, new list size: %d",
                    len(requested), len(reconciled),
                )
                report.warn(
                    WarningKind.COMPETENCY, position,
                    f"FRAC returned {len(reconciled)} of {len(requested)} competencies",
                )

    async def attach_position(
        self, auth_token: str, allocation: WorkAllocation, report: ReconciliationReport,
    ) -> None:
        try:
            allocation.position_id = await self._frac.create_or_fetch_position(
                auth_token, allocation.user_position,
            )
        except Exception as exc:
            logger.exception("Failed to resolve position %r", allocation.user_position)
            report.warn(WarningKind.POSITION, -1, f"position not resolved: {exc}")
