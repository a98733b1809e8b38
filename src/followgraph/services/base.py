"""BaseService — shared foundation for followgraph services.

Every service receives a :class:`GraphStore` at construction time. The
store is the only shared mutable resource; services keep no state of
their own between calls.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from followgraph.services.result import ErrorCode, ServiceError, ServiceResult

if TYPE_CHECKING:
    from followgraph.infrastructure.errors import StorageError
    from followgraph.infrastructure.store import GraphStore

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Subclasses implement domain operations using ``self._store`` for all
    data access, and report every outcome as a :class:`ServiceResult`.
    """

    def __init__(self, store: GraphStore) -> None:
        self._store = store

    @staticmethod
    def _fail(op: str, code: ErrorCode, message: str, **detail: Any) -> ServiceResult:
        """Build a failed result."""
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )

    @classmethod
    def _storage_failure(cls, op: str, exc: StorageError) -> ServiceResult:
        """Report a storage error unchanged, with its cause attached."""
        cause = exc.__cause__ or exc
        logger.warning("Storage failure during %s: %s", op, exc)
        return cls._fail(
            op,
            ErrorCode.STORAGE_FAILURE,
            str(exc),
            operation=exc.operation,
            cause_type=type(cause).__name__,
            cause=str(cause),
        )
