# src/taskdeck/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Longest prefix wins. Levels are the minimum a record needs to reach stderr.
_CONSOLE_FLOORS: tuple[tuple[str, int], ...] = (
    # Request failures are already shown to the user as notifications.
    ("taskdeck.net.", logging.ERROR),
    # Session set/cleared/loaded lines duplicate what /login and /logout print.
    ("taskdeck.core.session", logging.WARNING),
    ("taskdeck.", logging.NOTSET),
    ("py.warnings", logging.ERROR),
)


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the REPL readable while the log file gets everything.

    The console connector already renders every TaskClientError as a one-line
    notification, so the transport and classifier logs for the same failure
    stay in the file. Sync, auth and command logs pass through; anything
    outside the taskdeck tree (httpx, httpcore, asyncio) only shows at ERROR.
    """

    def __init__(self, floors: tuple[tuple[str, int], ...] = _CONSOLE_FLOORS) -> None:
        super().__init__()
        self._floors = sorted(floors, key=lambda item: len(item[0]), reverse=True)

    def floor_for(self, name: str) -> int:
        for prefix, level in self._floors:
            if name == prefix.rstrip(".") or name.startswith(prefix):
                return level
        return logging.ERROR

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= self.floor_for(record.name)


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskdeck",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Console handler on stderr (filtered) plus a DEBUG file handler in log_dir.

    Replaces any handlers already on the root logger, so call it once from
    the entry point. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "taskdeck.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)

    # httpx logs every request at INFO; Transport.send already logs it at DEBUG.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return log_file
