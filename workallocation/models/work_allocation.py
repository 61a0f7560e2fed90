"""Work allocation records: a user's roles, activities and competencies
within one work order."""

from pydantic import Field

from workallocation.models.common import DocumentModel


class ChildNode(DocumentModel):
    """An activity under a role.

    The ``submitted_*`` fields record a review hand-off and are local
    metadata; the reference taxonomy does not return them.
    """

    id: str | None = None
    type: str = "ACTIVITY"
    name: str | None = None
    description: str | None = None
    status: str | None = None
    source: str | None = None
    submitted_from_id: str | None = None
    submitted_from_name: str | None = None
    submitted_from_email: str | None = None
    submitted_to_id: str | None = None
    submitted_to_name: str | None = None
    submitted_to_email: str | None = None


class Role(DocumentModel):
    """A role. An empty id means it was authored locally."""

    id: str | None = None
    type: str = "ROLE"
    name: str | None = None
    description: str | None = None
    status: str | None = None
    source: str | None = None
    child_nodes: list[ChildNode] = Field(default_factory=list)


class CompetencyDetails(DocumentModel):
    id: str | None = None
    type: str = "COMPETENCY"
    name: str | None = None
    description: str | None = None
    status: str | None = None
    source: str | None = None
    level: str | None = None
    additional_properties: dict = Field(default_factory=dict)


class RoleCompetency(DocumentModel):
    role_details: Role | None = None
    competency_details: list[CompetencyDetails] = Field(default_factory=list)


class WorkAllocation(DocumentModel):
    """One user's assignment inside a work order."""

    id: str | None = None
    work_order_id: str | None = None
    user_id: str | None = None
    user_name: str | None = None
    user_email: str | None = None
    user_position: str | None = None
    position_id: str | None = None
    position_description: str | None = None
    role_competency_list: list[RoleCompetency] = Field(default_factory=list)
    unmapped_activities: list[ChildNode] = Field(default_factory=list)
    unmapped_competencies: list[CompetencyDetails] = Field(default_factory=list)
    error_count: int = Field(default=0, ge=0)
    progress: int = Field(default=0, ge=0, le=100)
    created_at: int | None = None
    created_by: str | None = None
    updated_at: int | None = None
    updated_by: str | None = None
