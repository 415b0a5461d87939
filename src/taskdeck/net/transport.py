# src/taskdeck/net/transport.py

"""
HTTP transport.

One httpx.AsyncClient bound to the service base URL. A request event hook
attaches the bearer token from the session store, so callers never handle
credentials. No retries and no classification happen here: network
exceptions propagate unchanged and HTTP statuses are returned as-is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from ..core.ports import SessionRepo

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


@dataclass(frozen=True, slots=True)
class RawResponse:
    status_code: int
    body: Any
    text: str
    decode_failed: bool = False

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport:
    def __init__(
        self,
        base_url: str,
        session_store: SessionRepo,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._session_store = session_store

        client_kwargs: dict[str, Any] = {}
        if timeout is not None:
            client_kwargs["timeout"] = timeout

        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=DEFAULT_HEADERS,
            event_hooks={"request": [self._attach_token]},
            transport=transport,
            **client_kwargs,
        )

    async def _attach_token(self, request: httpx.Request) -> None:
        session = self._session_store.get()
        if session is not None and session.token:
            request.headers["Authorization"] = session.authorization

    async def send(self, method: str, path: str, body: Any | None = None) -> RawResponse:
        logger.debug("-> %s %s", method, path)
        response = await self._client.request(method, path, json=body)
        logger.debug("<- %s %s %s", method, path, response.status_code)

        if not response.content:
            return RawResponse(status_code=response.status_code, body=None, text="")

        try:
            decoded = response.json()
        except ValueError:
            return RawResponse(
                status_code=response.status_code,
                body=None,
                text=response.text,
                decode_failed=True,
            )
        return RawResponse(status_code=response.status_code, body=decoded, text=response.text)

    async def aclose(self) -> None:
        await self._client.aclose()
