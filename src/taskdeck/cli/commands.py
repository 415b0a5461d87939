# src/taskdeck/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import cast

from ..core.state import AppState
from ..tasks.task_models import Task, TaskDraft, TaskPatch, TaskStatus

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], Awaitable[str]]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], Awaitable[str]]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /tasks, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Classified client errors raised by handlers propagate to the caller.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return await h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return await h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()

_STATUS_MARK = {
    TaskStatus.PENDING: "[ ]",
    TaskStatus.DONE: "[x]",
    TaskStatus.CANCELLED: "[-]",
}


def render_tasks(tasks: tuple[Task, ...] | list[Task]) -> str:
    if not tasks:
        return "No tasks."
    lines = ["Your tasks:"]
    for i, t in enumerate(tasks, start=1):
        lines.append(f"{i}. {_STATUS_MARK[t.status]} {t.name} ({t.status.value}) id={t.id}")
        for desc_line in t.description.splitlines():
            lines.append(f"      {desc_line}")
    return "\n".join(lines)


def _split_name_description(args: list[str]) -> tuple[str, str | None]:
    """'name words | description words' -> (name, description or None)."""
    text = " ".join(args)
    if "|" not in text:
        return text.strip(), None
    name, _, description = text.partition("|")
    return name.strip(), description.strip()


async def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_login(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) != 2:
        return "Usage: /login <email> <password>"

    logger.debug("Console login requested for %s", args[0])
    session = await state.auth.login(args[0], args[1])
    if emit:
        emit(f"Logged in as user {session.user_id}. Loading tasks...")
    await state.tasks.refresh()
    return render_tasks(state.tasks.tasks)


async def cmd_logout(state: AppState, args: list[str]) -> str:
    state.auth.logout()
    state.tasks.clear()
    return "Logged out."


async def cmd_whoami(state: AppState, args: list[str]) -> str:
    session = state.session_store.get()
    if session is None:
        return "Not logged in."
    return f"Logged in as user {session.user_id}."


async def cmd_tasks(state: AppState, args: list[str]) -> str:
    await state.tasks.refresh()
    return render_tasks(state.tasks.tasks)


async def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <name> | <description>
    """
    name, description = _split_name_description(args)
    if not name:
        return "Usage: /add <name> | <description>"

    created = await state.tasks.add(TaskDraft(name=name, description=description or ""))
    return f"Task created (id={created.id}).\n{render_tasks(state.tasks.tasks)}"


async def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <id> <name>                  -> rename
    /edit <id> <name> | <description>  -> rename + new description
    /edit <id> | <description>         -> new description only
    """
    if len(args) < 2:
        return "Usage: /edit <id> <name> | <description>"

    task_id = args[0]
    name, description = _split_name_description(args[1:])
    await state.tasks.edit(task_id, TaskPatch(name=name or None, description=description))
    return f"Task updated.\n{render_tasks(state.tasks.tasks)}"


async def cmd_status(state: AppState, args: list[str]) -> str:
    """
    /status <id> pending|done|cancelled
    """
    if len(args) != 2:
        return "Usage: /status <id> pending|done|cancelled"

    task_id, raw_status = args
    await state.tasks.change_status(task_id, TaskStatus.parse(raw_status))
    return f"Status updated.\n{render_tasks(state.tasks.tasks)}"


async def cmd_rm(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /rm <id>"

    await state.tasks.remove(args[0])
    return f"Task deleted.\n{render_tasks(state.tasks.tasks)}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("login", cmd_login, help_text="Log in: /login <email> <password>.")
registry.register("logout", cmd_logout, help_text="Log out and forget the session.")
registry.register("whoami", cmd_whoami, help_text="Show the current session user.")
registry.register("tasks", cmd_tasks, help_text="Reload and list your tasks.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Create a task: /add <name> | <description>.")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> <name> | <description>.")
registry.register("status", cmd_status, help_text="Change status: /status <id> pending|done|cancelled.")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["del"])
