# src/taskdeck/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.errors import TaskClientError, friendly_error_message
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


async def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

    session = state.session_store.get()
    if session is not None:
        _print_ts(f"Restored session for user {session.user_id}. Use /tasks to load your tasks.")

    def emit(text: str) -> None:
        # Immediate user-visible feedback for multi-step commands.
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = (await asyncio.to_thread(input, ">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = await command_registry.handle(state, user_input, emit=emit)
        except TaskClientError as e:
            logger.info("Command failed (%s): %s", e.kind.value, e)
            _print_ts(f"[ERROR] {friendly_error_message(e)}")
            continue
        except Exception:
            logger.exception("Command handler crashed.")
            _print_ts("Internal error while handling a command.")
            continue

        if response is None:
            _print_ts("Commands start with '/'. Use /help to list them.")
            continue

        _print_ts(response)

    logger.info("Console connector finished.")
