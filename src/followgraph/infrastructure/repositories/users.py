"""User records: insert, exact-match lookup, enumeration."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError

from followgraph.domain.models import User
from followgraph.domain.timestamps import from_storage, to_storage
from followgraph.infrastructure.database.schema import users
from followgraph.infrastructure.deadline import Deadline
from followgraph.infrastructure.repositories._base import EngineRepository


def _to_user(row: Any) -> User:
    return User(id=str(row.id), username=str(row.username), created=from_storage(row.created))


class UserRepository(EngineRepository):
    """Encapsulates SQL for the ``users`` table."""

    def insert_user(
        self,
        user_id: str,
        username: str,
        created: datetime,
        *,
        deadline: Deadline | None = None,
    ) -> bool:
        """Insert a user row.

        Returns False (and writes nothing) if *username* is already taken.
        """
        stmt = insert(users).values(id=user_id, username=username, created=to_storage(created))
        with self._guard("insert_user", deadline):
            try:
                with self._engine.begin() as conn:
                    conn.execute(stmt)
            except IntegrityError:
                if self.find_by_username(username) is not None:
                    return False
                raise
        return True

    def find_by_username(self, username: str, *, deadline: Deadline | None = None) -> User | None:
        """Exact, case-sensitive username match."""
        stmt = select(users).where(users.c.username == username)
        with self._guard("find_user_by_username", deadline), self._engine.connect() as conn:
            row = conn.execute(stmt).first()
        return _to_user(row) if row is not None else None

    def list_all(self, *, deadline: Deadline | None = None) -> list[User]:
        """All users, oldest first."""
        stmt = select(users).order_by(users.c.created, users.c.id)
        with self._guard("list_all_users", deadline), self._engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()
        return [_to_user(row) for row in rows]
