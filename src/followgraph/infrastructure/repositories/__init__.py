"""Repositories: the storage operations the services consume."""

from followgraph.infrastructure.repositories.follows import FollowRepository
from followgraph.infrastructure.repositories.users import UserRepository

__all__ = ["FollowRepository", "UserRepository"]
