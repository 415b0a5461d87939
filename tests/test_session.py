# tests/test_session.py

from __future__ import annotations

import json
import os
import stat
from pathlib import Path

import pytest

from taskdeck.core.session import FileSessionStore, Session, SessionStore


def test_session_store_set_get_clear() -> None:
    store = SessionStore()
    assert store.get() is None

    store.set(Session(token="t1", user_id="u1"))
    assert store.get() == Session(token="t1", user_id="u1")
    assert store.current_user_id() == "u1"

    store.clear()
    assert store.get() is None
    assert store.current_user_id() is None


def test_file_session_store_survives_restart(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "session.json"
    FileSessionStore(path).set(Session(token="t1", user_id="u1"))

    assert stat.S_IMODE(path.stat().st_mode) == 0o600
    assert FileSessionStore(path).get() == Session(token="t1", user_id="u1", token_type="bearer")


def test_file_session_store_clear_removes_file(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    store = FileSessionStore(path)
    store.set(Session(token="t1", user_id="u1"))

    store.clear()

    assert store.get() is None
    assert not path.exists()
    assert FileSessionStore(path).get() is None


def test_file_session_store_ignores_bad_files(tmp_path: Path) -> None:
    path = tmp_path / "session.json"

    path.write_text("{not json", "utf-8")
    assert FileSessionStore(path).get() is None

    path.write_text(json.dumps({"token": "t1"}), "utf-8")
    assert FileSessionStore(path).get() is None

    path.write_text(json.dumps(["t1", "u1"]), "utf-8")
    assert FileSessionStore(path).get() is None


def test_file_session_store_tmp_file_is_private_before_rename(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "session.json"
    # a leftover from an interrupted run must not keep its looser mode
    (tmp_path / "session.tmp").write_text("stale", "utf-8")
    os.chmod(tmp_path / "session.tmp", 0o644)
    modes: list[int] = []
    real_replace = os.replace

    def recording_replace(src, dst):
        modes.append(stat.S_IMODE(os.stat(src).st_mode))
        real_replace(src, dst)

    monkeypatch.setattr(os, "replace", recording_replace)

    FileSessionStore(path).set(Session(token="t1", user_id="u1"))

    assert modes == [0o600]
    assert json.loads(path.read_text("utf-8"))["token"] == "t1"


def test_file_session_store_failed_write_leaves_no_tmp(tmp_path: Path, monkeypatch, caplog) -> None:
    path = tmp_path / "session.json"

    def failing_replace(src, dst):
        raise PermissionError("read-only target")

    monkeypatch.setattr(os, "replace", failing_replace)
    store = FileSessionStore(path)

    with caplog.at_level("ERROR", logger="taskdeck.core.session"):
        store.set(Session(token="t1", user_id="u1"))

    # the in-memory session still works; nothing is left on disk
    assert store.get() == Session(token="t1", user_id="u1")
    assert list(tmp_path.iterdir()) == []
    assert "Failed to persist session" in caplog.text


@pytest.mark.parametrize("token", ["", None])
def test_file_session_store_rejects_empty_token_file(tmp_path: Path, token) -> None:
    path = tmp_path / "session.json"
    path.write_text(json.dumps({"token": token, "user_id": "u1"}), "utf-8")
    assert FileSessionStore(path).get() is None
