"""Shared plumbing for engine-backed repositories."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from followgraph.infrastructure.deadline import Deadline, check_deadline
from followgraph.infrastructure.errors import StorageError

logger = logging.getLogger(__name__)


class EngineRepository:
    """Base class holding the engine and translating driver errors."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @contextmanager
    def _guard(self, operation: str, deadline: Deadline | None) -> Iterator[None]:
        """Check *deadline*, then re-raise any SQLAlchemy error as StorageError."""
        check_deadline(deadline, operation)
        try:
            yield
        except SQLAlchemyError as exc:
            logger.debug("Storage call %s failed", operation, exc_info=True)
            raise StorageError(operation, str(exc)) from exc
