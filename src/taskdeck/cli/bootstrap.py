# src/taskdeck/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires session store, transport, gateway, auth and sync core into AppState.
"""

from __future__ import annotations

import logging

import httpx

from ..auth.auth_api import AuthClient
from ..config import get_settings
from ..core.session import FileSessionStore, SessionStore
from ..core.state import AppState
from ..net.transport import Transport
from ..tasks.task_gateway import RemoteTaskGateway
from ..tasks.task_sync import TaskSyncCore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.session_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    http_transport: httpx.AsyncBaseTransport | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings(). http_transport replaces the network
    (tests pass an httpx.MockTransport).
    """
    if settings is None:
        settings = get_settings()

    session_store: SessionStore
    if settings.persist_session:
        _ensure_local_dirs(settings)
        session_store = FileSessionStore(settings.session_path)
    else:
        session_store = SessionStore()

    transport = Transport(
        settings.api_base_url,
        session_store,
        timeout=settings.request_timeout_seconds,
        transport=http_transport,
    )
    gateway = RemoteTaskGateway(transport, session_store)

    logger.debug("State wired for %s", settings.api_base_url)
    return AppState(
        settings=settings,
        session_store=session_store,
        transport=transport,
        gateway=gateway,
        auth=AuthClient(transport, session_store),
        tasks=TaskSyncCore(gateway, session_store),
    )
