"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog

from followgraph.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    named = [logging.getLogger(n) for n in ("followgraph", "sqlalchemy", "sqlalchemy.engine")]
    levels = [logger.level for logger in named]
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    for logger, level in zip(named, levels, strict=True):
        logger.setLevel(level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("followgraph").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("followgraph").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("followgraph.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "followgraph.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_rendered_as_json(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("followgraph.services").warning("storage down")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "storage down"
        assert parsed["logger"] == "followgraph.services"

    def test_custom_stream(self) -> None:
        buf = io.StringIO()
        configure_logging(log_json=True, stream=buf)
        logging.getLogger("followgraph.repo").warning("locked")
        assert json.loads(buf.getvalue().strip())["event"] == "locked"

    def test_echo_sql_enables_engine_logger(self) -> None:
        configure_logging(echo_sql=True)
        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO
        configure_logging()
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
