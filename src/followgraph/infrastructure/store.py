"""GraphStore — the explicit storage handle injected into every service.

The GraphStore owns the database engine and the repositories built on it.
It is constructed once per process (or per test) from
:class:`FollowSettings` and passed to services at construction; there is
no module-level connection.

The store holds no mutable in-memory graph state. Every read goes to the
database, so concurrent callers only share what SQLite itself shares.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from followgraph.infrastructure.database.engine import init_database
from followgraph.infrastructure.repositories import FollowRepository, UserRepository

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from followgraph.config.settings import FollowSettings

logger = logging.getLogger(__name__)


class GraphStore:
    """Storage capability for users and follow edges.

    Usage::

        store = GraphStore(settings)
        DirectoryService(store).create_user("alice")
        store.close()
    """

    def __init__(self, settings: FollowSettings) -> None:
        self._settings = settings
        db = settings.database
        self._engine: Engine = init_database(
            self.root,
            filename=db.filename,
            busy_timeout=db.busy_timeout,
        )
        self._users = UserRepository(self._engine)
        self._follows = FollowRepository(self._engine)
        logger.debug("GraphStore opened at %s", self.root)

    @property
    def root(self) -> Path:
        """The data root directory."""
        return self._settings.data_root

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def settings(self) -> FollowSettings:
        """The resolved settings for this store."""
        return self._settings

    @property
    def users(self) -> UserRepository:
        return self._users

    @property
    def follows(self) -> FollowRepository:
        return self._follows

    def close(self) -> None:
        """Release pooled connections."""
        self._engine.dispose()
