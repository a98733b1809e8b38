"""FollowGraphService — directed follow edges and queries over them.

Every operation first resolves usernames to user records through the
:class:`DirectoryService`; an unresolved name fails the whole operation
with ``USER_NOT_FOUND`` before anything is written. Edges are then read
or written by user id; list queries join edges to ``users`` in SQL so
usernames come back in follow order.

Edge uniqueness is enforced: following an already-followed user is a
successful no-op that keeps the original timestamp.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from followgraph.domain.timestamps import start_of_day
from followgraph.infrastructure.errors import StorageError
from followgraph.services._helpers import utc_now
from followgraph.services.base import BaseService
from followgraph.services.directory import DirectoryService
from followgraph.services.result import ErrorCode, ServiceResult
from followgraph.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from followgraph.domain.models import User
    from followgraph.infrastructure.deadline import Deadline
    from followgraph.infrastructure.store import GraphStore

logger = logging.getLogger(__name__)


class FollowGraphService(BaseService):
    """Owns follow edges between users.

    Args:
        store: Storage handle.
        directory: Username resolver (defaults to a DirectoryService on *store*).
        clock: Zero-argument callable returning the current aware datetime.
    """

    def __init__(
        self,
        store: GraphStore,
        *,
        directory: DirectoryService | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(store)
        self._directory = directory or DirectoryService(store)
        self._clock = clock or utc_now

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def _resolve(
        self,
        op: str,
        names: dict[str, str | None],
        deadline: Deadline | None,
    ) -> dict[str, User] | ServiceResult:
        """Resolve every ``{field: username}``; return a failed result on any miss.

        Raises:
            StorageError: Propagated from the directory lookup.
        """
        missing = [field for field, name in names.items() if not name]
        if missing:
            return self._fail(
                op,
                ErrorCode.INVALID_INPUT,
                f"Required: {', '.join(missing)}",
                fields=missing,
            )

        resolved: dict[str, User] = {}
        unknown: list[str] = []
        with trace_span("resolve_users") as span:
            for field, name in names.items():
                user = self._directory.lookup(name, deadline=deadline)  # type: ignore[arg-type]
                if user is None:
                    unknown.append(name)  # type: ignore[arg-type]
                else:
                    resolved[field] = user
            if span:
                span.annotate("resolved", len(resolved))

        if unknown:
            return self._fail(
                op,
                ErrorCode.USER_NOT_FOUND,
                f"User not found: {', '.join(unknown)}",
                usernames=unknown,
            )
        return resolved

    def _follower_names(self, user: User, deadline: Deadline | None) -> list[str]:
        with trace_span("load_followers"):
            return self._store.follows.follower_usernames(user.id, deadline=deadline)

    def _following_names(self, user: User, deadline: Deadline | None) -> list[str]:
        with trace_span("load_following"):
            return self._store.follows.followee_usernames(user.id, deadline=deadline)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @traced
    def follow(
        self,
        follower: str | None,
        followee: str | None,
        *,
        deadline: Deadline | None = None,
    ) -> ServiceResult:
        """Create the edge ``follower -> followee`` stamped with the current time."""
        op = "follow"
        warnings: list[str] = []
        try:
            resolved = self._resolve(op, {"follower": follower, "followee": followee}, deadline)
            if isinstance(resolved, ServiceResult):
                return resolved
            src, dst = resolved["follower"], resolved["followee"]

            now = self._clock()
            with trace_span("insert_edge"):
                created = self._store.follows.insert_edge(src.id, dst.id, now, deadline=deadline)

            followed_at = now
            if not created:
                existing = self._store.follows.get_edge(src.id, dst.id, deadline=deadline)
                if existing is not None:
                    followed_at = existing.created
                warnings.append(f"{src.username} already follows {dst.username}")
        except StorageError as exc:
            return self._storage_failure(op, exc)

        logger.debug("follow %s -> %s (created=%s)", src.username, dst.username, created)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "follower": src.username,
                "followee": dst.username,
                "created": created,
                "followed_at": followed_at.isoformat(),
                "message": "Followed successfully",
            },
            warnings=warnings,
        )

    @traced
    def unfollow(
        self,
        follower: str | None,
        followee: str | None,
        *,
        deadline: Deadline | None = None,
    ) -> ServiceResult:
        """Remove the edge ``follower -> followee`` if present.

        A missing edge is still a success (``removed == 0``); only a
        missing user is an error.
        """
        op = "unfollow"
        try:
            resolved = self._resolve(op, {"follower": follower, "followee": followee}, deadline)
            if isinstance(resolved, ServiceResult):
                return resolved
            src, dst = resolved["follower"], resolved["followee"]

            with trace_span("delete_edge"):
                removed = self._store.follows.delete_one_edge(src.id, dst.id, deadline=deadline)
        except StorageError as exc:
            return self._storage_failure(op, exc)

        logger.debug("unfollow %s -> %s (removed=%d)", src.username, dst.username, removed)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "follower": src.username,
                "followee": dst.username,
                "removed": removed,
                "message": "Unfollowed successfully",
            },
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @traced
    def followers(self, username: str | None, *, deadline: Deadline | None = None) -> ServiceResult:
        """Usernames of everyone following *username*."""
        op = "followers"
        try:
            resolved = self._resolve(op, {"username": username}, deadline)
            if isinstance(resolved, ServiceResult):
                return resolved
            items = self._follower_names(resolved["username"], deadline)
        except StorageError as exc:
            return self._storage_failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={"username": username, "count": len(items), "items": items},
        )

    @traced
    def following(self, username: str | None, *, deadline: Deadline | None = None) -> ServiceResult:
        """Usernames of everyone *username* follows."""
        op = "following"
        try:
            resolved = self._resolve(op, {"username": username}, deadline)
            if isinstance(resolved, ServiceResult):
                return resolved
            items = self._following_names(resolved["username"], deadline)
        except StorageError as exc:
            return self._storage_failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={"username": username, "count": len(items), "items": items},
        )

    @traced
    def daily_follower_count(
        self,
        username: str | None,
        *,
        deadline: Deadline | None = None,
    ) -> ServiceResult:
        """Count follows of *username* created since midnight today.

        "Today" is the calendar day of the service clock in the configured
        ``graph.day_timezone`` (server local time when unset). Computed at
        call time; nothing is cached.
        """
        op = "daily_followers"
        try:
            resolved = self._resolve(op, {"username": username}, deadline)
            if isinstance(resolved, ServiceResult):
                return resolved

            since = start_of_day(self._clock(), self._store.settings.graph.day_timezone)
            with trace_span("count_edges"):
                count = self._store.follows.count_edges_since(
                    resolved["username"].id, since, deadline=deadline
                )
        except StorageError as exc:
            return self._storage_failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={"username": username, "daily_followers": count, "since": since.isoformat()},
        )

    @traced
    def common_followers(
        self,
        first: str | None,
        second: str | None,
        *,
        deadline: Deadline | None = None,
    ) -> ServiceResult:
        """Usernames following both *first* and *second*.

        Ordered as in ``followers(first)``, filtered by membership in
        ``followers(second)``.
        """
        op = "common_followers"
        try:
            resolved = self._resolve(op, {"username1": first, "username2": second}, deadline)
            if isinstance(resolved, ServiceResult):
                return resolved

            first_followers = self._follower_names(resolved["username1"], deadline)
            second_followers = set(self._follower_names(resolved["username2"], deadline))
        except StorageError as exc:
            return self._storage_failure(op, exc)

        items = [name for name in first_followers if name in second_followers]
        return ServiceResult(
            ok=True,
            op=op,
            data={"usernames": [first, second], "count": len(items), "items": items},
        )
