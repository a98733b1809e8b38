"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

import time
from collections.abc import Generator

import pytest

from followgraph.infrastructure.store import GraphStore
from followgraph.services.directory import DirectoryService
from followgraph.services.follow_graph import FollowGraphService
from followgraph.services.result import ServiceError, ServiceResult
from followgraph.services.telemetry import (
    Span,
    _current_span,
    disable_telemetry,
    enable_telemetry,
    trace_span,
    traced,
)
from tests.conftest import create_users


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    yield
    disable_telemetry()
    _current_span.set(None)


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.005)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "children" not in d
        assert "annotations" not in d

    def test_annotate(self) -> None:
        span = Span(name="test")
        span.annotate("rows", 3)
        assert span.to_dict()["annotations"] == {"rows": 3}


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("test") as span:
            assert span is None

    def test_no_root_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("test") as span:
            assert span is None

    def test_nested_spans(self) -> None:
        enable_telemetry()
        root = Span(name="root")
        token = _current_span.set(root)
        try:
            with trace_span("a"), trace_span("b"):
                pass
        finally:
            _current_span.reset(token)
        assert [c.name for c in root.children] == ["a"]
        assert [c.name for c in root.children[0].children] == ["b"]
        assert root.children[0].finished is not None


class TestTracedDecorator:
    def test_noop_when_disabled(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            return ServiceResult(ok=True, op="test")

        assert my_func().meta is None

    def test_injects_meta_when_enabled(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            with trace_span("stage"):
                pass
            return ServiceResult(ok=True, op="test", meta={"existing": 1})

        enable_telemetry()
        result = my_func()
        assert result.meta is not None
        assert result.meta["existing"] == 1
        assert result.meta["telemetry"]["children"][0]["name"] == "stage"

    def test_error_result_gets_telemetry(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            return ServiceResult(ok=False, op="test", error=ServiceError(code="X", message="no"))

        enable_telemetry()
        result = my_func()
        assert result.meta is not None
        assert "telemetry" in result.meta

    def test_exception_propagates(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            msg = "boom"
            raise ValueError(msg)

        enable_telemetry()
        with pytest.raises(ValueError, match="boom"):
            my_func()
        assert _current_span.get() is None

    def test_non_service_result_passthrough(self) -> None:
        @traced
        def my_func() -> str:
            return "hello"

        enable_telemetry()
        assert my_func() == "hello"


class TestTracedOnServices:
    def test_create_user_spans(self, store: GraphStore) -> None:
        enable_telemetry()
        result = DirectoryService(store).create_user("alice")
        assert result.meta is not None
        tel = result.meta["telemetry"]
        assert "DirectoryService.create_user" in tel["name"]
        names = [c["name"] for c in tel.get("children", [])]
        assert names == ["check_existing", "insert_user"]

    def test_follow_spans(self, store: GraphStore) -> None:
        create_users(store, "alice", "bob")
        enable_telemetry()
        result = FollowGraphService(store).follow("alice", "bob")
        assert result.meta is not None
        children = result.meta["telemetry"]["children"]
        assert [c["name"] for c in children] == ["resolve_users", "insert_edge"]
        assert children[0]["annotations"] == {"resolved": 2}
