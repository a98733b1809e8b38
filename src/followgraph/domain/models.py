"""Frozen records for users and follow edges.

Edges reference users by id only; user data is never embedded in an edge.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class User(BaseModel):
    """A registered user. Never mutated after creation."""

    model_config = {"frozen": True}

    id: str
    username: str
    created: datetime


class FollowEdge(BaseModel):
    """A directed follow relationship ``follower_id -> followee_id``."""

    model_config = {"frozen": True}

    id: int
    follower_id: str
    followee_id: str
    created: datetime
