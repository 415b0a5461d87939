# tests/fakes.py

from __future__ import annotations

import json
from typing import Any

import httpx

_WIRE_STATUSES = {"Pendiente", "Terminada", "Cancelada"}


class FakeTaskService:
    """
    In-memory stand-in for the remote task service, served through httpx.MockTransport.

    - Records every request for assertions
    - Issues tokens "t1", "t2", ... on login
    - `queue` holds canned outcomes consumed by the next requests:
      an int (status code), an httpx.Response, or an exception to raise
    """

    def __init__(self, users: dict[str, tuple[str, str]] | None = None) -> None:
        # email -> (password, user_id)
        self.users = users if users is not None else {"ana@example.com": ("secret", "u1")}
        self.tasks: dict[str, dict[str, Any]] = {}
        self.tokens: dict[str, str] = {}
        self.requests: list[httpx.Request] = []
        self.queue: list[int | httpx.Response | Exception] = []
        self._next_task = 1
        self._next_token = 1

    # ---- helpers for tests ----

    def mock_transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def issue_token(self, user_id: str) -> str:
        token = f"t{self._next_token}"
        self._next_token += 1
        self.tokens[token] = user_id
        return token

    def seed(self, user_id: str, name: str, description: str = "", status: str = "Pendiente") -> dict[str, Any]:
        task = {
            "id": f"task-{self._next_task}",
            "task_name": name,
            "task_description": description,
            "task_status": status,
            "user_id": user_id,
        }
        self._next_task += 1
        self.tasks[task["id"]] = task
        return dict(task)

    def tasks_of(self, user_id: str) -> list[dict[str, Any]]:
        return [dict(t) for t in self.tasks.values() if t["user_id"] == user_id]

    def paths(self) -> list[str]:
        return [f"{r.method} {r.url.path}" for r in self.requests]

    # ---- request handling ----

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.queue:
            outcome = self.queue.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            if isinstance(outcome, httpx.Response):
                return outcome
            return httpx.Response(outcome, json={"detail": f"forced {outcome}"})

        method = request.method
        parts = [p for p in request.url.path.split("/") if p]

        if method == "POST" and parts == ["auth", "login"]:
            return self._login(request)

        user_id = self._authenticated_user(request)
        if user_id is None:
            return httpx.Response(401, json={"detail": "Not authenticated"})

        if method == "GET" and len(parts) == 3 and parts[:2] == ["tasks", "user"]:
            return httpx.Response(200, json=self.tasks_of(parts[2]))

        if method == "POST" and parts == ["tasks"]:
            return self._create(request)

        if len(parts) >= 2 and parts[0] == "tasks":
            task = self.tasks.get(parts[1])
            if task is None:
                return httpx.Response(404, json={"detail": "Task not found"})

            if method == "PATCH" and len(parts) == 3 and parts[2] == "status":
                body = json.loads(request.content)
                if set(body) != {"task_status"} or body["task_status"] not in _WIRE_STATUSES:
                    return httpx.Response(422, json={"detail": "invalid status"})
                task["task_status"] = body["task_status"]
                return httpx.Response(200, json=dict(task))

            if method == "PATCH" and len(parts) == 2:
                body = json.loads(request.content)
                if "task_name" in body and not body["task_name"]:
                    return httpx.Response(422, json={"detail": "task_name must not be empty"})
                for key in ("task_name", "task_description"):
                    if key in body:
                        task[key] = body[key]
                return httpx.Response(200, json=dict(task))

            if method == "DELETE" and len(parts) == 2:
                del self.tasks[parts[1]]
                return httpx.Response(204)

        return httpx.Response(405, json={"detail": "Method not allowed"})

    def _authenticated_user(self, request: httpx.Request) -> str | None:
        header = request.headers.get("Authorization", "")
        if not header.startswith("Bearer "):
            return None
        return self.tokens.get(header[len("Bearer "):])

    def _login(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        entry = self.users.get(body.get("correo", ""))
        if entry is None or entry[0] != body.get("password"):
            return httpx.Response(401, json={"detail": "Credenciales incorrectas"})
        user_id = entry[1]
        token = self.issue_token(user_id)
        return httpx.Response(
            200, json={"access_token": token, "token_type": "bearer", "user_id": user_id}
        )

    def _create(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        expected = {"task_name", "task_description", "task_status", "user_id"}
        if set(body) != expected or not body["task_name"] or body["task_status"] not in _WIRE_STATUSES:
            return httpx.Response(422, json={"detail": "invalid task payload"})
        task = self.seed(
            body["user_id"], body["task_name"], body["task_description"], body["task_status"]
        )
        return httpx.Response(201, json=task)
