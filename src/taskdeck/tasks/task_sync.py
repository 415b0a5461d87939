# src/taskdeck/tasks/task_sync.py

from __future__ import annotations

"""
Task synchronization core.

Owns the cached task collection of the current user. Every mutation is a
two-step sequence:
- call the gateway (create / update / set_status / delete),
- refresh the whole collection from the server.

The collection is only ever replaced wholesale with what the server
returned; it is never patched locally. A failed mutation skips the refresh
and the error propagates unchanged.
"""

import contextlib
import logging
from collections.abc import Callable, Hashable, Iterator
from dataclasses import replace

from ..core.errors import ActionInFlight, MissingIdentity
from ..core.ports import SessionRepo, TaskGateway
from .task_models import Task, TaskDraft, TaskPatch, TaskStatus

logger = logging.getLogger(__name__)

CollectionListener = Callable[[tuple[Task, ...]], None]


class TaskSyncCore:
    def __init__(self, gateway: TaskGateway, session_store: SessionRepo) -> None:
        self._gateway = gateway
        self._session_store = session_store

        self._tasks: tuple[Task, ...] = ()
        self._loaded = False
        self._in_flight: set[tuple[str, Hashable]] = set()
        self._listeners: list[CollectionListener] = []

    # ---- read-only projections ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    @property
    def loaded(self) -> bool:
        return self._loaded

    def find(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def is_pending(self, action: str, target: Hashable) -> bool:
        return (action, target) in self._in_flight

    def subscribe(self, listener: CollectionListener) -> Callable[[], None]:
        """Call listener with the new collection after every replacement. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _unsubscribe

    def clear(self) -> None:
        """Forget the cached collection (e.g. at logout)."""
        self._tasks = ()
        self._loaded = False

    # ---- internals ----

    def _require_user_id(self) -> str:
        session = self._session_store.get()
        if session is None or not session.token or not session.user_id:
            raise MissingIdentity("No active session (token and user id required)")
        return session.user_id

    def _replace(self, tasks: list[Task]) -> None:
        self._tasks = tuple(tasks)
        self._loaded = True
        logger.debug("Task collection replaced (%d tasks)", len(self._tasks))

        for listener in list(self._listeners):
            try:
                listener(self._tasks)
            except Exception:
                logger.exception("Task collection listener failed")

    @contextlib.contextmanager
    def _admit(self, action: str, target: Hashable) -> Iterator[None]:
        key = (action, target)
        if key in self._in_flight:
            raise ActionInFlight(f"{action} already in progress for {target}")
        self._in_flight.add(key)
        try:
            yield
        finally:
            self._in_flight.discard(key)

    # ---- operations ----

    async def refresh(self) -> tuple[Task, ...]:
        user_id = self._require_user_id()
        tasks = await self._gateway.list_for_user(user_id)
        self._replace(tasks)
        return self._tasks

    async def add(self, draft: TaskDraft) -> Task:
        user_id = self._require_user_id()
        owner_id = draft.owner_id or user_id
        if owner_id != user_id:
            # Tasks always belong to the session user.
            raise MissingIdentity(f"Draft owner {owner_id!r} does not match the session user")

        resolved = replace(draft, owner_id=owner_id)
        # The draft itself is the target: only an identical draft is refused.
        with self._admit("add", resolved):
            created = await self._gateway.create(resolved)
            await self.refresh()
        return created

    async def edit(self, task_id: str, patch: TaskPatch) -> Task:
        with self._admit("edit", task_id):
            updated = await self._gateway.update(task_id, patch)
            await self.refresh()
        return updated

    async def change_status(self, task_id: str, status: TaskStatus | str) -> Task:
        with self._admit("status", task_id):
            updated = await self._gateway.set_status(task_id, status)
            await self.refresh()
        return updated

    async def remove(self, task_id: str) -> None:
        with self._admit("remove", task_id):
            await self._gateway.delete(task_id)
            await self.refresh()
