"""DirectoryService — user identity: registration, lookup, enumeration.

Usernames are unique, required, and immutable. Lookups are exact and
case-sensitive; absence from :meth:`find_by_username` is a normal outcome,
not an error.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from followgraph.domain.ids import generate_user_id
from followgraph.infrastructure.errors import StorageError
from followgraph.services._helpers import utc_now
from followgraph.services.base import BaseService
from followgraph.services.result import ErrorCode, ServiceResult
from followgraph.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from followgraph.domain.models import User
    from followgraph.infrastructure.deadline import Deadline

logger = logging.getLogger(__name__)


def user_payload(user: User) -> dict[str, Any]:
    """Serializable view of a user record."""
    return {"id": user.id, "username": user.username, "created": user.created.isoformat()}


class DirectoryService(BaseService):
    """Owns user records."""

    def lookup(self, username: str, *, deadline: Deadline | None = None) -> User | None:
        """Resolve *username* to its record, or None.

        Used by other services; storage errors propagate as StorageError.
        """
        return self._store.users.find_by_username(username, deadline=deadline)

    @traced
    def create_user(
        self,
        username: str | None,
        *,
        deadline: Deadline | None = None,
    ) -> ServiceResult:
        """Register a new user.

        Fails with ``INVALID_INPUT`` for a missing/empty username and
        ``DUPLICATE_USERNAME`` if the name is taken.
        """
        op = "create_user"
        if not username:
            return self._fail(op, ErrorCode.INVALID_INPUT, "Username is required", field="username")

        try:
            with trace_span("check_existing"):
                existing = self.lookup(username, deadline=deadline)
            if existing is not None:
                return self._duplicate(op, username)

            user_id = generate_user_id()
            created = utc_now()
            with trace_span("insert_user"):
                inserted = self._store.users.insert_user(
                    user_id, username, created, deadline=deadline
                )
        except StorageError as exc:
            return self._storage_failure(op, exc)

        if not inserted:
            # Lost a race with a concurrent create of the same name.
            return self._duplicate(op, username)

        logger.debug("Created user %s (%s)", username, user_id)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": user_id,
                "username": username,
                "created": created.isoformat(),
                "message": "User added",
            },
        )

    @traced
    def find_by_username(
        self,
        username: str | None,
        *,
        deadline: Deadline | None = None,
    ) -> ServiceResult:
        """Look up a user; ``data["found"]`` is False when there is no match."""
        op = "find_user"
        if not username:
            return self._fail(op, ErrorCode.INVALID_INPUT, "Username is required", field="username")

        try:
            user = self.lookup(username, deadline=deadline)
        except StorageError as exc:
            return self._storage_failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={"found": user is not None, "user": user_payload(user) if user else None},
        )

    @traced
    def get_user(self, username: str | None, *, deadline: Deadline | None = None) -> ServiceResult:
        """Like :meth:`find_by_username` but absence is ``USER_NOT_FOUND``."""
        op = "get_user"
        if not username:
            return self._fail(op, ErrorCode.INVALID_INPUT, "Username is required", field="username")

        try:
            user = self.lookup(username, deadline=deadline)
        except StorageError as exc:
            return self._storage_failure(op, exc)

        if user is None:
            return self._fail(
                op, ErrorCode.USER_NOT_FOUND, f"User not found: {username}", usernames=[username]
            )
        return ServiceResult(ok=True, op=op, data=user_payload(user))

    @traced
    def list_users(self, *, deadline: Deadline | None = None) -> ServiceResult:
        """All registered users."""
        op = "list_users"
        try:
            users = self._store.users.list_all(deadline=deadline)
        except StorageError as exc:
            return self._storage_failure(op, exc)

        items = [user_payload(u) for u in users]
        return ServiceResult(ok=True, op=op, data={"count": len(items), "items": items})

    def _duplicate(self, op: str, username: str) -> ServiceResult:
        return self._fail(
            op,
            ErrorCode.DUPLICATE_USERNAME,
            f"Username already registered: {username}",
            username=username,
        )
