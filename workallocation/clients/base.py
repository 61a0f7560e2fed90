"""Shared JSON-over-HTTP plumbing for outbound service clients."""

from typing import Any

import httpx

AUTH_TOKEN_HEADER = "x-authenticated-user-token"


class JsonServiceClient:
    """POSTs JSON to a base URL and returns the decoded response body.

    A fresh AsyncClient is opened per call. HTTP and transport errors
    propagate to the caller; no retries at this layer.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def _post(
        self,
        path: str,
        payload: Any,
        *,
        auth_token: str | None = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        headers = {"Content-Type": "application/json"}
        if auth_token:
            headers[AUTH_TOKEN_HEADER] = auth_token

        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            resp = await client.post(path, json=payload, headers=headers, params=params)
            resp.raise_for_status()
            return resp.json()
