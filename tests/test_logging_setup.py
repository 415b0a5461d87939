# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from taskdeck.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    ("name", "level", "shown"),
    [
        ("taskdeck.tasks.task_sync", logging.DEBUG, True),
        ("taskdeck.cli.commands", logging.INFO, True),
        ("taskdeck.net.classify", logging.WARNING, False),
        ("taskdeck.net.classify", logging.ERROR, True),
        ("taskdeck.net.transport", logging.DEBUG, False),
        ("taskdeck.core.session", logging.INFO, False),
        ("taskdeck.core.session", logging.WARNING, True),
        ("taskdeck.core.errors", logging.INFO, True),
        ("py.warnings", logging.WARNING, False),
        ("httpx", logging.WARNING, False),
        ("httpcore.connection", logging.ERROR, True),
        ("taskdeckish", logging.INFO, False),
    ],
)
def test_console_filter_floors(name, level, shown) -> None:
    assert _ConsoleNoiseFilter().filter(_record(name, level)) is shown


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_writes_everything_to_file(tmp_path: Path, restore_root_logging, capsys) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs")

    logging.getLogger("taskdeck.net.classify").warning("tasks list: server fault (503)")
    logging.getLogger("taskdeck.tasks.task_sync").info("Task collection replaced (2 tasks)")
    for h in logging.getLogger().handlers:
        h.flush()

    assert log_file == tmp_path / "logs" / "taskdeck.log"
    text = log_file.read_text("utf-8")
    assert "server fault (503)" in text
    assert "collection replaced" in text

    err = capsys.readouterr().err
    assert "server fault" not in err
    assert "collection replaced" in err
    assert logging.getLogger("httpx").level == logging.WARNING
