# src/taskdeck/auth/auth_api.py

from __future__ import annotations

import logging

import httpx

from ..core.errors import ProtocolError, Unauthorized, ValidationFailed
from ..core.ports import HttpTransport, SessionRepo
from ..core.session import Session
from ..net.classify import classify_request_error, raise_for_response, require_json

logger = logging.getLogger(__name__)


class AuthClient:
    """Login/logout against the remote service. Owns writes to the session store."""

    def __init__(self, transport: HttpTransport, session_store: SessionRepo) -> None:
        self._transport = transport
        self._session_store = session_store

    async def login(self, email: str, password: str) -> Session:
        email = (email or "").strip()
        if not email or not password:
            raise ValidationFailed("Email and password are required", detail="missing credentials")

        what = "login"
        try:
            resp = await self._transport.send(
                "POST", "/auth/login", {"correo": email, "password": password}
            )
        except httpx.RequestError as e:
            raise classify_request_error(e, what=what) from e

        try:
            raise_for_response(resp, session_store=self._session_store, what=what)
        except Unauthorized as e:
            raise Unauthorized(
                "Invalid credentials", status_code=e.status_code, detail=e.detail
            ) from e

        data = require_json(resp, what=what)
        if not isinstance(data, dict):
            raise ProtocolError(f"{what}: expected a JSON object")

        token = data.get("access_token")
        user_id = data.get("user_id")
        if isinstance(user_id, int) and not isinstance(user_id, bool):
            user_id = str(user_id)
        if not isinstance(token, str) or not token:
            raise ProtocolError(f"{what}: response has no access_token")
        if not isinstance(user_id, str) or not user_id:
            raise ProtocolError(f"{what}: response has no user_id")

        token_type = data.get("token_type")
        session = Session(
            token=token,
            user_id=user_id,
            token_type=token_type if isinstance(token_type, str) and token_type else "bearer",
        )
        self._session_store.set(session)
        logger.info("Logged in as user_id=%s", user_id)
        return session

    def logout(self) -> None:
        self._session_store.clear()
        logger.info("Logged out")
