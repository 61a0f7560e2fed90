"""FRAC reference taxonomy client.

FRAC is the authoritative store for roles, activities, competencies and
positions. Locally authored entries (no id) are submitted here and come
back carrying FRAC ids. Every FRAC response wraps its payload in
``responseData``.
"""

import logging
from typing import Any

import httpx

from workallocation.clients.base import JsonServiceClient
from workallocation.models.work_allocation import CompetencyDetails, Role

logger = logging.getLogger(__name__)

ADD_NODE_PATH = "/frac/addDataNode"
ADD_NODE_BULK_PATH = "/frac/addDataNodeBulk"
SEARCH_NODES_PATH = "/frac/searchNodes"

NODE_SOURCE = "WAT"
UNVERIFIED = "UNVERIFIED"
POSITION_TYPE = "POSITION"


def _response_data(body: Any) -> Any:
    if not isinstance(body, dict) or "responseData" not in body:
        raise ValueError(f"Unexpected FRAC response: {body!r}")
    return body["responseData"]


def _new_node_defaults(node: dict[str, Any]) -> dict[str, Any]:
    if not node.get("id"):
        if not node.get("source"):
            node["source"] = NODE_SOURCE
        if not node.get("status"):
            node["status"] = UNVERIFIED
    return node


class FracClient(JsonServiceClient):
    """Create-or-fetch operations against the FRAC service."""

    async def create_role(self, auth_token: str, role: Role) -> Role:
        """Submit a role with its activities; returns the role with FRAC ids."""
        payload = _new_node_defaults(role.to_document())
        payload["childNodes"] = [_new_node_defaults(c) for c in payload.get("childNodes", [])]
        body = await self._post(ADD_NODE_BULK_PATH, payload, auth_token=auth_token)
        return Role.model_validate(_response_data(body))

    async def reconcile_competencies(
        self, auth_token: str, requested: list[CompetencyDetails],
    ) -> list[CompetencyDetails]:
        """Create the competencies FRAC does not know yet.

        Entries that already carry an id pass through unchanged. An entry
        that fails to be created is logged and left out, so a shorter
        result than ``requested`` signals a partial failure.
        """
        reconciled: list[CompetencyDetails] = []
        for competency in requested:
            if competency.id:
                reconciled.append(competency)
                continue
            try:
                body = await self._post(
                    ADD_NODE_PATH,
                    _new_node_defaults(competency.to_document()),
                    auth_token=auth_token,
                )
                created = CompetencyDetails.model_validate(_response_data(body))
            except (httpx.HTTPError, ValueError) as exc:
                logger.warning("FRAC competency %r not created: %s", competency.name, exc)
                continue
            if created.level is None:
                created.level = competency.level
            reconciled.append(created)
        return reconciled

    async def create_or_fetch_position(self, auth_token: str, position_name: str) -> str | None:
        """Return the FRAC id of the named position, creating it if absent."""
        search = {
            "searches": [
                {"type": POSITION_TYPE, "field": "name", "keyword": position_name},
            ],
        }
        found = _response_data(
            await self._post(SEARCH_NODES_PATH, search, auth_token=auth_token)
        ) or []
        for node in found:
            if node.get("id") and (node.get("name") or "").lower() == position_name.lower():
                return node["id"]

        created = _response_data(await self._post(
            ADD_NODE_PATH,
            _new_node_defaults({"type": POSITION_TYPE, "name": position_name}),
            auth_token=auth_token,
        ))
        position_id = created.get("id") if isinstance(created, dict) else None
        if not position_id:
            logger.warning("FRAC returned no id for new position %r", position_name)
        return position_id
