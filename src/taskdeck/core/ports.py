# src/taskdeck/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The sync core depends on Protocols instead of concrete implementations.
This keeps the HTTP layer swappable and makes testing easier.
"""

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from ..net.transport import RawResponse
    from ..tasks.task_models import Task, TaskDraft, TaskPatch, TaskStatus
    from .session import Session


class SessionRepo(Protocol):
    def get(self) -> Session | None: ...
    def set(self, session: Session) -> None: ...
    def clear(self) -> None: ...


class HttpTransport(Protocol):
    """JSON-over-HTTP sender with the bearer token already attached."""

    async def send(self, method: str, path: str, body: Any | None = None) -> RawResponse: ...


class TaskGateway(Protocol):
    """Remote task operations; every failure is a classified TaskClientError."""

    async def list_for_user(self, user_id: str | None) -> list[Task]: ...
    async def create(self, draft: TaskDraft) -> Task: ...
    async def update(self, task_id: str, patch: TaskPatch) -> Task: ...
    async def set_status(self, task_id: str, status: TaskStatus | str) -> Task: ...
    async def delete(self, task_id: str) -> None: ...
