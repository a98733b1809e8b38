"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, followgraph.toml only contains
overrides. A fresh data root needs no config file at all.
"""

from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    filename: str = "followgraph.db"
    busy_timeout: float = 5.0
    echo: bool = False


class GraphConfig(BaseModel):
    """[graph] section.

    Attributes:
        day_timezone: IANA zone name that defines the calendar day for
            daily follower counts. ``None`` means the server's local zone.
    """

    model_config = {"frozen": True}

    day_timezone: str | None = None

    @field_validator("day_timezone")
    @classmethod
    def _known_zone(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            msg = f"Unknown time zone: {value!r}"
            raise ValueError(msg) from exc
        return value


class FollowConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    graph: GraphConfig = Field(default_factory=GraphConfig)
