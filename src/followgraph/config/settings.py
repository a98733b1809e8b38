"""FollowSettings — the one settings object every command runs with.

Sources, highest priority first:
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``FOLLOWGRAPH_*``, nested with ``__``
                    (``FOLLOWGRAPH_GRAPH__DAY_TIMEZONE=UTC``)
  3. TOML file    — ``followgraph.toml`` found by walk-up, or ``--config``
  4. Code defaults — the section models in :mod:`followgraph.config.models`

Only the ``[database]`` and ``[graph]`` tables and a top-level ``timeout``
are read from TOML; output flags belong to the invocation, not the file.
"""

from __future__ import annotations

import logging
import os
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from followgraph.config.discovery import find_config, read_toml
from followgraph.config.models import DatabaseConfig, GraphConfig

logger = logging.getLogger(__name__)

TOML_KEYS = frozenset({"database", "graph", "timeout"})
DATA_ROOT_ENV_VAR = "FOLLOWGRAPH_DATA_ROOT"

# The TOML file for the FollowSettings currently being constructed.
_active_toml: ContextVar[Path | None] = ContextVar("_active_toml", default=None)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the keys of a ``followgraph.toml`` in TOML_KEYS."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        data = read_toml(toml_path) if toml_path and toml_path.is_file() else {}
        ignored = sorted(set(data) - TOML_KEYS)
        if ignored:
            logger.warning("Ignoring keys in %s: %s", toml_path, ", ".join(ignored))
        self._data: dict[str, Any] = {k: v for k, v in data.items() if k in TOML_KEYS}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class FollowSettings(BaseSettings):
    """Resolved, frozen settings for one followctl invocation.

    Attributes:
        data_root: Directory holding ``.followgraph/``: the ``--data-root``
            flag, then ``FOLLOWGRAPH_DATA_ROOT``, then the config file's
            directory, then CWD.
        config_path: The TOML file in effect, or None.
        timeout: Per-command storage deadline in seconds (None = no deadline).
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FOLLOWGRAPH_",
        "env_nested_delimiter": "__",
    }

    data_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    timeout: float | None = None

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    graph: GraphConfig = Field(default_factory=GraphConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _active_toml.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        data_root: Path | None = None,
        **cli_flags: Any,
    ) -> FollowSettings:
        """Build settings for a CLI invocation.

        An explicit *config_path* that does not exist is ignored rather than
        searched around. Without one, ``followgraph.toml`` is discovered by
        walking up from *data_root* (the flag, else ``FOLLOWGRAPH_DATA_ROOT``,
        else CWD).
        """
        if data_root is None and os.environ.get(DATA_ROOT_ENV_VAR):
            data_root = Path(os.environ[DATA_ROOT_ENV_VAR])

        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(data_root)

        if data_root is None:
            data_root = toml_path.parent if toml_path else Path.cwd()

        token = _active_toml.set(toml_path)
        try:
            return cls(data_root=data_root, config_path=toml_path, **cli_flags)
        finally:
            _active_toml.reset(token)
