# src/taskdeck/core/session.py

"""
Session identity (bearer token + user id).

The only client-side state that outlives a single operation. Written at
login, cleared at logout or when the server rejects the credentials; read by
the transport on every request.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Session:
    token: str
    user_id: str
    token_type: str = "bearer"

    @property
    def authorization(self) -> str:
        return f"Bearer {self.token}"


class SessionStore:
    """In-process session holder. Single writer, many readers."""

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    def get(self) -> Session | None:
        return self._session

    def set(self, session: Session) -> None:
        self._session = session
        logger.info("Session set for user_id=%s", session.user_id)

    def clear(self) -> None:
        if self._session is not None:
            logger.info("Session cleared for user_id=%s", self._session.user_id)
        self._session = None

    def current_user_id(self) -> str | None:
        session = self.get()
        if session is None or not session.token or not session.user_id:
            return None
        return session.user_id


class FileSessionStore(SessionStore):
    """
    SessionStore that also keeps the session in a private JSON file,
    so a restarted console client is still logged in.

    A missing, unreadable or malformed file simply means "no session".
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        super().__init__(self._load())

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Session | None:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.exception("Failed to read session file %s", self._path)
            return None

        if not isinstance(data, dict):
            logger.warning("Ignoring malformed session file %s", self._path)
            return None

        token = data.get("token")
        user_id = data.get("user_id")
        if not isinstance(token, str) or not token or not isinstance(user_id, str) or not user_id:
            logger.warning("Ignoring incomplete session file %s", self._path)
            return None

        token_type = data.get("token_type")
        session = Session(
            token=token,
            user_id=user_id,
            token_type=token_type if isinstance(token_type, str) and token_type else "bearer",
        )
        logger.info("Loaded session for user_id=%s from %s", session.user_id, self._path)
        return session

    def set(self, session: Session) -> None:
        super().set(session)
        tmp = self._path.with_suffix(".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            # Holds a bearer token: private from the moment it exists.
            tmp.unlink(missing_ok=True)
            fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(json.dumps(asdict(session), ensure_ascii=False, indent=2))
            os.replace(tmp, self._path)
        except OSError:
            logger.exception("Failed to persist session to %s", self._path)
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)

    def clear(self) -> None:
        super().clear()
        try:
            self._path.unlink(missing_ok=True)
        except OSError:
            logger.exception("Failed to remove session file %s", self._path)
