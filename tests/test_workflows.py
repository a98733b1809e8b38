"""Integration workflow tests — multi-step scenarios across both services.

These exercise how user registration, follow mutations and the graph
queries agree with each other over a shared store.
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

from followgraph.config.settings import FollowSettings
from followgraph.infrastructure.store import GraphStore
from followgraph.services.directory import DirectoryService
from followgraph.services.follow_graph import FollowGraphService
from followgraph.services.result import ErrorCode
from tests.conftest import NOON, FixedClock


class TestSocialScenario:
    """alice and bob follow carol; alice also follows bob."""

    def test_end_to_end(self, store: GraphStore) -> None:
        directory = DirectoryService(store)
        clock = FixedClock(NOON)
        graph = FollowGraphService(store, directory=directory, clock=clock)

        for name in ("alice", "bob", "carol"):
            assert directory.create_user(name).ok
        assert directory.list_users().data["count"] == 3

        assert graph.follow("alice", "carol").ok
        assert graph.follow("bob", "carol").ok
        assert graph.follow("alice", "bob").ok

        assert graph.followers("carol").data["items"] == ["alice", "bob"]
        assert graph.following("alice").data["items"] == ["carol", "bob"]
        assert graph.daily_follower_count("carol").data["daily_followers"] == 2
        assert graph.common_followers("carol", "bob").data["items"] == ["alice"]

        assert graph.unfollow("bob", "carol").ok
        assert graph.followers("carol").data["items"] == ["alice"]
        assert graph.daily_follower_count("carol").data["daily_followers"] == 1
        assert graph.common_followers("carol", "bob").data["items"] == ["alice"]

        clock.now = NOON + timedelta(days=1)
        assert graph.daily_follower_count("carol").data["daily_followers"] == 0
        assert graph.followers("carol").data["items"] == ["alice"]

    def test_common_followers_of_two_followees(self, store: GraphStore) -> None:
        directory = DirectoryService(store)
        graph = FollowGraphService(store, clock=FixedClock(NOON))
        for name in ("alice", "bob", "carol"):
            directory.create_user(name)
        graph.follow("alice", "bob")
        graph.follow("alice", "carol")
        graph.follow("bob", "carol")
        graph.follow("carol", "alice")
        graph.follow("carol", "bob")

        assert set(graph.followers("carol").data["items"]) == {"alice", "bob"}
        assert graph.common_followers("alice", "bob").data["items"] == ["carol"]

    def test_failed_operations_leave_graph_unchanged(self, store: GraphStore) -> None:
        directory = DirectoryService(store)
        graph = FollowGraphService(store, clock=FixedClock(NOON))
        for name in ("alice", "bob"):
            directory.create_user(name)
        graph.follow("alice", "bob")

        failures = [
            (graph.follow("alice", "ghost"), ErrorCode.USER_NOT_FOUND),
            (graph.unfollow("ghost", "bob"), ErrorCode.USER_NOT_FOUND),
            (directory.create_user("bob"), ErrorCode.DUPLICATE_USERNAME),
            (graph.follow("", "bob"), ErrorCode.INVALID_INPUT),
        ]
        for result, code in failures:
            assert result.error is not None
            assert result.error.code == code

        assert directory.list_users().data["count"] == 2
        assert graph.followers("bob").data["items"] == ["alice"]
        assert graph.following("alice").data["items"] == ["bob"]

    def test_state_survives_reopen(self, tmp_path: Path) -> None:
        settings = FollowSettings.from_cli(data_root=tmp_path)
        first = GraphStore(settings)
        DirectoryService(first).create_user("alice")
        DirectoryService(first).create_user("bob")
        FollowGraphService(first).follow("alice", "bob")
        first.close()

        second = GraphStore(settings)
        try:
            assert FollowGraphService(second).followers("bob").data["items"] == ["alice"]
        finally:
            second.close()
