"""Tests for the GraphStore handle."""

from datetime import UTC, datetime
from pathlib import Path

from followgraph.config.settings import FollowSettings
from followgraph.infrastructure.repositories import FollowRepository, UserRepository
from followgraph.infrastructure.store import GraphStore


class TestGraphStore:
    def test_exposes_repositories(self, store: GraphStore) -> None:
        assert isinstance(store.users, UserRepository)
        assert isinstance(store.follows, FollowRepository)

    def test_root_and_settings(self, tmp_path: Path) -> None:
        settings = FollowSettings.from_cli(data_root=tmp_path)
        s = GraphStore(settings)
        try:
            assert s.root == tmp_path
            assert s.settings is settings
            assert (tmp_path / ".followgraph" / "followgraph.db").exists()
        finally:
            s.close()

    def test_isolated_instances(self, tmp_path: Path) -> None:
        a = GraphStore(FollowSettings.from_cli(data_root=tmp_path / "a"))
        b = GraphStore(FollowSettings.from_cli(data_root=tmp_path / "b"))
        try:
            a.users.insert_user("usr_0000000000000001", "alice", datetime.now(UTC))
            assert a.users.find_by_username("alice") is not None
            assert b.users.find_by_username("alice") is None
        finally:
            a.close()
            b.close()
