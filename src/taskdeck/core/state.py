# src/taskdeck/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..auth.auth_api import AuthClient
    from ..net.transport import Transport
    from ..tasks.task_gateway import RemoteTaskGateway
    from ..tasks.task_sync import TaskSyncCore
    from .session import SessionStore


@dataclass
class AppState:
    # Settings object (config.Settings or a test namespace).
    settings: Any

    session_store: SessionStore
    transport: Transport
    gateway: RemoteTaskGateway
    auth: AuthClient
    tasks: TaskSyncCore

    async def aclose(self) -> None:
        await self.transport.aclose()
