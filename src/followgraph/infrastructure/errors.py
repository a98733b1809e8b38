"""Storage-layer exceptions.

Repositories translate every SQLAlchemy failure into :class:`StorageError`
with the original exception chained as ``__cause__``. Services treat these
as the only expected exceptions from storage.
"""

from __future__ import annotations


class StorageError(Exception):
    """The storage collaborator failed (I/O, integrity, serialization)."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class DeadlineExceeded(StorageError):
    """The caller's deadline expired before the storage call was issued."""
