"""SQLite database engine and schema via SQLAlchemy Core."""

from followgraph.infrastructure.database.engine import create_db_engine, init_database
from followgraph.infrastructure.database.schema import follows, metadata, users

__all__ = [
    "create_db_engine",
    "follows",
    "init_database",
    "metadata",
    "users",
]
