"""Per-call deadlines propagated from the caller into storage calls.

A :class:`Deadline` is checked before each storage round-trip. There are
no retries: an expired deadline fails the call immediately.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from followgraph.infrastructure.errors import DeadlineExceeded


@dataclass(frozen=True)
class Deadline:
    """An absolute expiry on a monotonic clock."""

    expires_at: float
    clock: Callable[[], float] = field(default=time.monotonic, repr=False, compare=False)

    @classmethod
    def after(cls, seconds: float, *, clock: Callable[[], float] = time.monotonic) -> Deadline:
        """Deadline *seconds* from now."""
        return cls(expires_at=clock() + seconds, clock=clock)

    def remaining(self) -> float:
        """Seconds left (zero or negative once expired)."""
        return self.expires_at - self.clock()

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0

    def check(self, operation: str) -> None:
        """Raise :class:`DeadlineExceeded` if the deadline has passed."""
        if self.expired:
            raise DeadlineExceeded(operation, "deadline exceeded before storage call")


def check_deadline(deadline: Deadline | None, operation: str) -> None:
    """No-op when *deadline* is None."""
    if deadline is not None:
        deadline.check(operation)
