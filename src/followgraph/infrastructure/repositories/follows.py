"""Follow edges: insert-if-absent, delete one, lookups, username joins, windowed counts."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import Column, delete, func, insert, select
from sqlalchemy.exc import IntegrityError

from followgraph.domain.models import FollowEdge
from followgraph.domain.timestamps import from_storage, to_storage
from followgraph.infrastructure.database.schema import follows, users
from followgraph.infrastructure.deadline import Deadline
from followgraph.infrastructure.repositories._base import EngineRepository


def _to_edge(row: Any) -> FollowEdge:
    return FollowEdge(
        id=int(row.id),
        follower_id=str(row.follower_id),
        followee_id=str(row.followee_id),
        created=from_storage(row.created),
    )


class FollowRepository(EngineRepository):
    """Encapsulates SQL for the ``follows`` table."""

    def insert_edge(
        self,
        follower_id: str,
        followee_id: str,
        created: datetime,
        *,
        deadline: Deadline | None = None,
    ) -> bool:
        """Insert the edge ``follower_id -> followee_id``.

        Returns False if a live edge for the pair already exists; the
        existing edge and its timestamp are left untouched.
        """
        stmt = insert(follows).values(
            follower_id=follower_id,
            followee_id=followee_id,
            created=to_storage(created),
        )
        with self._guard("insert_edge", deadline):
            try:
                with self._engine.begin() as conn:
                    conn.execute(stmt)
            except IntegrityError:
                # Only a unique-pair violation means "already following".
                if self.get_edge(follower_id, followee_id) is not None:
                    return False
                raise
        return True

    def get_edge(
        self,
        follower_id: str,
        followee_id: str,
        *,
        deadline: Deadline | None = None,
    ) -> FollowEdge | None:
        """The live edge for the pair, if any."""
        stmt = select(follows).where(
            follows.c.follower_id == follower_id,
            follows.c.followee_id == followee_id,
        )
        with self._guard("get_edge", deadline), self._engine.connect() as conn:
            row = conn.execute(stmt).first()
        return _to_edge(row) if row is not None else None

    def delete_one_edge(
        self,
        follower_id: str,
        followee_id: str,
        *,
        deadline: Deadline | None = None,
    ) -> int:
        """Delete at most one edge matching the pair. Returns rows removed."""
        first_match = (
            select(follows.c.id)
            .where(
                follows.c.follower_id == follower_id,
                follows.c.followee_id == followee_id,
            )
            .order_by(follows.c.id)
            .limit(1)
            .scalar_subquery()
        )
        stmt = delete(follows).where(follows.c.id == first_match)
        with self._guard("delete_one_edge", deadline), self._engine.begin() as conn:
            result = conn.execute(stmt)
        return int(result.rowcount or 0)

    def find_edges(
        self,
        *,
        follower_id: str | None = None,
        followee_id: str | None = None,
        deadline: Deadline | None = None,
    ) -> list[FollowEdge]:
        """Edges filtered by follower and/or followee, in creation order.

        Raises:
            ValueError: If neither filter is given.
        """
        if follower_id is None and followee_id is None:
            msg = "find_edges requires follower_id or followee_id"
            raise ValueError(msg)

        stmt = select(follows)
        if follower_id is not None:
            stmt = stmt.where(follows.c.follower_id == follower_id)
        if followee_id is not None:
            stmt = stmt.where(follows.c.followee_id == followee_id)
        stmt = stmt.order_by(follows.c.id)

        with self._guard("find_edges", deadline), self._engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()
        return [_to_edge(row) for row in rows]

    def follower_usernames(
        self,
        followee_id: str,
        *,
        deadline: Deadline | None = None,
    ) -> list[str]:
        """Usernames of everyone following *followee_id*, in follow order."""
        return self._joined_usernames(
            "follower_usernames",
            match=follows.c.followee_id,
            other_end=follows.c.follower_id,
            user_id=followee_id,
            deadline=deadline,
        )

    def followee_usernames(
        self,
        follower_id: str,
        *,
        deadline: Deadline | None = None,
    ) -> list[str]:
        """Usernames *follower_id* follows, in follow order."""
        return self._joined_usernames(
            "followee_usernames",
            match=follows.c.follower_id,
            other_end=follows.c.followee_id,
            user_id=follower_id,
            deadline=deadline,
        )

    def _joined_usernames(
        self,
        operation: str,
        *,
        match: Column[Any],
        other_end: Column[Any],
        user_id: str,
        deadline: Deadline | None,
    ) -> list[str]:
        stmt = (
            select(users.c.username)
            .select_from(follows.join(users, users.c.id == other_end))
            .where(match == user_id)
            .order_by(follows.c.id)
        )
        with self._guard(operation, deadline), self._engine.connect() as conn:
            return [str(name) for name in conn.execute(stmt).scalars()]

    def count_edges_since(
        self,
        followee_id: str,
        threshold: datetime,
        *,
        deadline: Deadline | None = None,
    ) -> int:
        """Count edges into *followee_id* created at or after *threshold*."""
        stmt = select(func.count(follows.c.id)).where(
            follows.c.followee_id == followee_id,
            follows.c.created >= to_storage(threshold),
        )
        with self._guard("count_edges", deadline), self._engine.connect() as conn:
            return int(conn.execute(stmt).scalar_one() or 0)
