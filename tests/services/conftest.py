"""Fakes for the external clients used by service-layer tests."""

from itertools import count

import pytest

from workallocation.models.work_allocation import CompetencyDetails, Role


class FakeFracClient:
    """In-memory FRAC: assigns ids to anything without one and records calls."""

    def __init__(self) -> None:
        self._ids = count(1)
        self.created_roles: list[Role] = []
        self.competency_requests: list[list[CompetencyDetails]] = []
        self.position_requests: list[str] = []
        self.fail_roles: set[str] = set()
        self.drop_competencies: set[str] = set()

    def _next_id(self, prefix: str) -> str:
        return f"{prefix}{next(self._ids):03d}"

    async def create_role(self, auth_token: str, role: Role) -> Role:
        if role.name in self.fail_roles:
            raise RuntimeError(f"FRAC rejected role {role.name}")
        self.created_roles.append(role.model_copy(deep=True))
        returned = Role(
            id=role.id or self._next_id("RID"),
            name=role.name,
            description=role.description,
            source="WAT",
            status="UNVERIFIED",
        )
        # FRAC echoes children with ids but without local provenance fields.
        for child in role.child_nodes:
            returned.child_nodes.append(child.model_copy(update={
                "id": child.id or self._next_id("AID"),
                "submitted_from_id": None,
                "submitted_from_name": None,
                "submitted_from_email": None,
                "submitted_to_id": None,
                "submitted_to_name": None,
                "submitted_to_email": None,
            }))
        return returned

    async def reconcile_competencies(
        self, auth_token: str, requested: list[CompetencyDetails],
    ) -> list[CompetencyDetails]:
        self.competency_requests.append(list(requested))
        return [
            c if c.id else c.model_copy(update={"id": self._next_id("CID")})
            for c in requested
            if c.name not in self.drop_competencies
        ]

    async def create_or_fetch_position(self, auth_token: str, position_name: str) -> str:
        self.position_requests.append(position_name)
        return f"PID-{position_name.lower()}"


class FakeUserDirectory:
    def __init__(self, users: dict[str, dict] | None = None) -> None:
        self.users = users or {}
        self.requests: list[set[str]] = []

    async def get_users_by_ids(self, user_ids: set[str]) -> dict[str, dict]:
        self.requests.append(set(user_ids))
        return {uid: self.users[uid] for uid in user_ids if uid in self.users}


@pytest.fixture
def frac() -> FakeFracClient:
    return FakeFracClient()


@pytest.fixture
def user_directory() -> FakeUserDirectory:
    return FakeUserDirectory({
        "u1": {"userId": "u1", "firstName": "Asha", "lastName": "Rao", "email": "asha@example.org"},
    })
