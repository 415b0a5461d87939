# src/taskdeck/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ..core.errors import ProtocolError, ValidationFailed


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Values are the strings the remote service stores and returns.
    """

    PENDING = "Pendiente"
    DONE = "Terminada"
    CANCELLED = "Cancelada"

    @classmethod
    def parse(cls, raw: object) -> TaskStatus:
        """
        Accept a member, a wire value, or an English alias (pending/done/cancelled).
        Raises ValidationFailed for anything else.
        """
        if isinstance(raw, TaskStatus):
            return raw
        if isinstance(raw, str):
            s = raw.strip()
            try:
                return cls(s)
            except ValueError:
                pass
            alias = _STATUS_ALIASES.get(s.lower())
            if alias is not None:
                return alias
        raise ValidationFailed(f"Unknown task status: {raw!r}", detail=f"unknown status {raw!r}")


_STATUS_ALIASES: dict[str, TaskStatus] = {
    "pending": TaskStatus.PENDING,
    "pendiente": TaskStatus.PENDING,
    "done": TaskStatus.DONE,
    "terminada": TaskStatus.DONE,
    "cancelled": TaskStatus.CANCELLED,
    "canceled": TaskStatus.CANCELLED,
    "cancelada": TaskStatus.CANCELLED,
}


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    name: str
    description: str
    status: TaskStatus
    owner_id: str

    @classmethod
    def from_wire(cls, raw: Any) -> Task:
        """Build a Task from a server payload. Malformed payloads raise ProtocolError."""
        if not isinstance(raw, dict):
            raise ProtocolError(f"Expected a task object, got {type(raw).__name__}")

        missing = [k for k in ("id", "task_name", "task_status", "user_id") if k not in raw]
        if missing:
            raise ProtocolError(f"Task payload is missing fields: {', '.join(missing)}")

        name = raw["task_name"]
        if not isinstance(name, str):
            raise ProtocolError("task_name must be a string")
        if not name.strip():
            raise ProtocolError("task_name must not be blank")

        description = raw.get("task_description")
        if description is None:
            description = ""
        elif not isinstance(description, str):
            raise ProtocolError("task_description must be a string")

        try:
            status = TaskStatus(raw["task_status"])
        except ValueError as e:
            raise ProtocolError(f"Unknown task_status from server: {raw['task_status']!r}") from e

        return cls(
            id=_wire_id(raw["id"], "id"),
            name=name,
            description=description,
            status=status,
            owner_id=_wire_id(raw["user_id"], "user_id"),
        )


def _wire_id(value: Any, field_name: str) -> str:
    # Some backends return integer ids; the client treats them as opaque text.
    if isinstance(value, bool):
        raise ProtocolError(f"{field_name} must be a string")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value:
        return value
    raise ProtocolError(f"{field_name} must be a non-empty string")


def _require_name(name: str) -> str:
    if not name or not name.strip():
        raise ValidationFailed("Task name must not be empty", detail="task name is empty")
    return name


@dataclass(frozen=True, slots=True)
class TaskDraft:
    """A task that does not exist on the server yet."""

    name: str
    description: str = ""
    owner_id: str | None = None

    def to_wire(self, owner_id: str) -> dict[str, str]:
        return {
            "task_name": _require_name(self.name),
            "task_description": self.description,
            "task_status": TaskStatus.PENDING.value,
            "user_id": owner_id,
        }


@dataclass(frozen=True, slots=True)
class TaskPatch:
    """Partial update: only fields that are not None are sent."""

    name: str | None = None
    description: str | None = None

    def to_wire(self) -> dict[str, str]:
        out: dict[str, str] = {}
        if self.name is not None:
            out["task_name"] = _require_name(self.name)
        if self.description is not None:
            out["task_description"] = self.description
        return out
