# src/taskdeck/tasks/task_gateway.py

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from ..core.errors import MissingIdentity, NotFound, ProtocolError
from ..core.ports import HttpTransport, SessionRepo
from ..net.classify import classify_request_error, raise_for_response, require_json
from ..net.transport import RawResponse
from .task_models import Task, TaskDraft, TaskPatch, TaskStatus

logger = logging.getLogger(__name__)


def _task_path(task_id: str, suffix: str = "") -> str:
    if not task_id:
        raise NotFound("Task id is empty")
    return f"/tasks/{quote(str(task_id), safe='')}{suffix}"


class RemoteTaskGateway:
    """
    Remote task operations over the HTTP transport.

    Each operation is one request. Results are normalized into Task objects;
    every failure is raised as a classified TaskClientError.
    """

    def __init__(self, transport: HttpTransport, session_store: SessionRepo) -> None:
        self._transport = transport
        self._session_store = session_store

    async def _call(self, method: str, path: str, body: dict | None = None, *, what: str) -> RawResponse:
        try:
            resp = await self._transport.send(method, path, body)
        except httpx.RequestError as e:
            raise classify_request_error(e, what=what) from e
        raise_for_response(resp, session_store=self._session_store, what=what)
        return resp

    async def _call_for_task(self, method: str, path: str, body: dict | None = None, *, what: str) -> Task:
        resp = await self._call(method, path, body, what=what)
        return Task.from_wire(require_json(resp, what=what))

    async def list_for_user(self, user_id: str | None) -> list[Task]:
        if not user_id:
            raise MissingIdentity("Cannot list tasks without a user id")

        what = "list tasks"
        resp = await self._call("GET", f"/tasks/user/{quote(user_id, safe='')}", what=what)
        data = require_json(resp, what=what)
        if not isinstance(data, list):
            raise ProtocolError(f"{what}: expected a JSON array, got {type(data).__name__}")

        tasks = [Task.from_wire(item) for item in data]
        foreign = [t.id for t in tasks if t.owner_id != user_id]
        if foreign:
            raise ProtocolError(f"{what}: server returned tasks of another user: {foreign}")

        logger.debug("Listed %d tasks for user_id=%s", len(tasks), user_id)
        return tasks

    async def create(self, draft: TaskDraft) -> Task:
        owner_id = draft.owner_id or self._current_user_id()
        if not owner_id:
            raise MissingIdentity("Cannot create a task without an owner id")

        payload = draft.to_wire(owner_id)
        task = await self._call_for_task("POST", "/tasks/", payload, what="create task")
        logger.info("Created task id=%s", task.id)
        return task

    async def update(self, task_id: str, patch: TaskPatch) -> Task:
        path = _task_path(task_id)
        return await self._call_for_task("PATCH", path, patch.to_wire(), what=f"update task {task_id}")

    async def set_status(self, task_id: str, status: TaskStatus | str) -> Task:
        new_status = TaskStatus.parse(status)
        path = _task_path(task_id, "/status")
        task = await self._call_for_task(
            "PATCH", path, {"task_status": new_status.value}, what=f"set status of task {task_id}"
        )
        logger.info("Task %s -> %s", task.id, task.status.value)
        return task

    async def delete(self, task_id: str) -> None:
        path = _task_path(task_id)
        await self._call("DELETE", path, what=f"delete task {task_id}")
        logger.info("Deleted task id=%s", task_id)

    def _current_user_id(self) -> str | None:
        session = self._session_store.get()
        return session.user_id if session is not None and session.user_id else None
