"""Shared pytest fixtures and test helpers for followgraph tests."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from followgraph.config.settings import FollowSettings
from followgraph.infrastructure.database.engine import init_database
from followgraph.infrastructure.store import GraphStore


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host FOLLOWGRAPH_* variables out of settings resolution."""
    for var in (
        "FOLLOWGRAPH_CONFIG",
        "FOLLOWGRAPH_DATA_ROOT",
        "FOLLOWGRAPH_TIMEOUT",
        "FOLLOWGRAPH_GRAPH__DAY_TIMEZONE",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Iterator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def store(tmp_path: Path) -> Iterator[GraphStore]:
    """GraphStore on a temp data root, with day boundaries in UTC."""
    settings = FollowSettings.from_cli(data_root=tmp_path, graph={"day_timezone": "UTC"})
    s = GraphStore(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test classes.
    """
    monkeypatch.chdir(tmp_path)


class FixedClock:
    """Settable clock for FollowGraphService."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


# ---------------------------------------------------------------------------
# Shared test helpers (used across service test modules)
# ---------------------------------------------------------------------------

NOON = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


def create_user(store: GraphStore, username: str) -> dict[str, Any]:
    """Create a user via DirectoryService, asserting success."""
    from followgraph.services.directory import DirectoryService

    result = DirectoryService(store).create_user(username)
    assert result.ok, result.error
    return result.data


def create_users(store: GraphStore, *usernames: str) -> None:
    for name in usernames:
        create_user(store, name)


def follow(store: GraphStore, follower: str, followee: str, **kwargs: Any) -> dict[str, Any]:
    """Follow via FollowGraphService, asserting success."""
    from followgraph.services.follow_graph import FollowGraphService

    result = FollowGraphService(store, **kwargs).follow(follower, followee)
    assert result.ok, result.error
    return result.data
