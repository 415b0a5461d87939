# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest
import pytest_asyncio

from taskdeck.cli.bootstrap import create_initial_state
from taskdeck.core.session import Session
from taskdeck.core.state import AppState

from .fakes import FakeTaskService


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskdeck-test",
        log_level="DEBUG",
        api_base_url="https://tasks.test",
        request_timeout_seconds=None,
        data_dir=tmp_path,
        session_path=tmp_path / "session.json",
        persist_session=False,
    )


@pytest.fixture()
def service() -> FakeTaskService:
    return FakeTaskService()


@pytest_asyncio.fixture()
async def state(settings: SimpleNamespace, service: FakeTaskService) -> AppState:
    """
    AppState wired with the real transport/gateway/sync core;
    only the network is replaced by the in-memory fake service.
    """
    st = create_initial_state(settings=settings, http_transport=service.mock_transport())
    yield st
    await st.aclose()


@pytest.fixture()
def logged_in(state: AppState, service: FakeTaskService) -> Session:
    """Session for user u1, as if /auth/login had succeeded."""
    session = Session(token=service.issue_token("u1"), user_id="u1")
    state.session_store.set(session)
    return session
