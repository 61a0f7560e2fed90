"""User directory client — batch lookup of basic user details."""

from typing import Any

from workallocation.clients.base import JsonServiceClient

USER_SEARCH_PATH = "/private/user/v1/search"

USER_FIELDS = [
    "userId",
    "firstName",
    "lastName",
    "email",
    "channel",
    "rootOrgId",
    "profileDetails",
]


class UserDirectoryClient(JsonServiceClient):

    async def get_users_by_ids(self, user_ids: set[str]) -> dict[str, dict[str, Any]]:
        """Map each known user id to its detail record. Unknown ids are absent."""
        if not user_ids:
            return {}
        payload = {
            "request": {
                "filters": {"userId": sorted(user_ids)},
                "fields": USER_FIELDS,
                "limit": len(user_ids),
            },
        }
        body = await self._post(USER_SEARCH_PATH, payload)
        content = (
            body.get("result", {}).get("response", {}).get("content", [])
            if isinstance(body, dict) else []
        )
        users: dict[str, dict[str, Any]] = {}
        for entry in content:
            key = entry.get("userId") or entry.get("id")
            if key in user_ids:
                users[key] = entry
        return users
