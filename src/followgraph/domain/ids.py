"""User identity generation and validation.

INVARIANT: IDs are permanent. Once generated, an ID never changes and is
independent of the username it was created for.
"""

from __future__ import annotations

import re
import uuid

USER_ID_PREFIX = "usr_"
USER_ID_PATTERN = re.compile(r"^usr_[0-9a-f]{16}$")


def generate_user_id() -> str:
    """Return a fresh opaque user id (``usr_`` + 16 hex chars)."""
    return f"{USER_ID_PREFIX}{uuid.uuid4().hex[:16]}"


def validate_user_id(user_id: str) -> bool:
    """Check whether *user_id* has the shape produced by :func:`generate_user_id`."""
    return USER_ID_PATTERN.match(user_id) is not None
