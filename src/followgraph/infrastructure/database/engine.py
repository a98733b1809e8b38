"""Database engine setup for SQLite with WAL mode.

SQLite is the persistence layer: WAL mode for concurrent readers,
foreign keys for edge referential integrity. The DB is stored at
``{data_root}/.followgraph/{filename}``.

SQLAlchemy Core (not ORM) is used: repositories issue explicit statements
and map rows to domain records themselves.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from followgraph.infrastructure.database.schema import metadata

DATA_DIRNAME = ".followgraph"
DEFAULT_DB_FILENAME = "followgraph.db"


def create_db_engine(db_path: Path, *, busy_timeout: float = 5.0) -> Engine:
    """Create a SQLite engine with WAL mode and foreign keys enabled.

    *busy_timeout* is how long (seconds) a connection waits on a locked
    database before the driver raises.
    Statement logging goes through ``configure_logging(echo_sql=True)``.
    """
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"timeout": busy_timeout},
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(
    data_root: Path,
    *,
    filename: str = DEFAULT_DB_FILENAME,
    busy_timeout: float = 5.0,
) -> Engine:
    """Initialize the database at ``{data_root}/.followgraph/{filename}``.

    Creates the ``.followgraph/`` directory and all tables from
    :data:`schema.metadata`. Idempotent — safe to call on an existing root.

    Returns the engine ready for use.
    """
    data_dir = data_root / DATA_DIRNAME
    data_dir.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(data_dir / filename, busy_timeout=busy_timeout)
    metadata.create_all(engine)
    return engine
