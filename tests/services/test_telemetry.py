"""Tests for telemetry primitives: Span and @traced."""

from __future__ import annotations

import time

import pytest

from bumpctl.services.result import ServiceResult
from bumpctl.services.telemetry import (
    Span,
    disable_telemetry,
    enable_telemetry,
    get_current_span,
    traced,
)


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.005)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_annotations(self) -> None:
        span = Span(name="root")
        assert "annotations" not in span.to_dict()
        span.annotate("manifests", 3)
        assert span.to_dict()["annotations"] == {"manifests": 3}


@traced
def _operation(fail: bool = False) -> ServiceResult:
    span = get_current_span()
    if span is not None:
        span.annotate("seen", True)
    if fail:
        raise RuntimeError("boom")
    return ServiceResult(ok=True, op="probe")


class TestTraced:
    def test_disabled_is_passthrough(self) -> None:
        disable_telemetry()
        assert _operation().meta is None
        assert get_current_span() is None

    def test_enabled_injects_meta(self) -> None:
        enable_telemetry()
        result = _operation()
        assert result.meta is not None
        telemetry = result.meta["telemetry"]
        assert telemetry["name"].endswith("_operation")
        assert telemetry["annotations"] == {"seen": True}

    def test_span_reset_after_call(self) -> None:
        enable_telemetry()
        _operation()
        assert get_current_span() is None

    def test_exception_propagates_and_resets(self) -> None:
        enable_telemetry()
        with pytest.raises(RuntimeError):
            _operation(fail=True)
        assert get_current_span() is None
