"""SQLAlchemy Core table definitions for the followgraph database.

``follows`` carries a UNIQUE(follower_id, followee_id) constraint: at most
one live edge per ordered pair. Foreign keys enforce that both endpoints
reference existing users (requires ``PRAGMA foreign_keys=ON``).
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Text, primary_key=True),
    Column("username", Text, nullable=False, unique=True),
    Column("created", Text, nullable=False),
)

follows = Table(
    "follows",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("follower_id", Text, ForeignKey("users.id"), nullable=False),
    Column("followee_id", Text, ForeignKey("users.id"), nullable=False),
    Column("created", Text, nullable=False),  # UTC ISO-8601, microsecond precision
    UniqueConstraint("follower_id", "followee_id", name="uq_follows_pair"),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_follows_follower", follows.c.follower_id)
Index("ix_follows_followee", follows.c.followee_id)
Index("ix_follows_followee_created", follows.c.followee_id, follows.c.created)
