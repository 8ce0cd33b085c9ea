"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from bumpctl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="propagate_version", data={"count": 3})
        assert result.ok is True
        assert result.data == {"count": 3}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_keeps_partial_data(self) -> None:
        result = ServiceResult(
            ok=False,
            op="propagate_version",
            data={"updated": ["/ws/Cargo.toml"]},
            error=ServiceError(code="NOT_FOUND", message="/ws/libs/foo: manifest not found"),
        )
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.data["updated"] == ["/ws/Cargo.toml"]

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="propagate_version", meta={"telemetry": {"name": "x"}})
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["meta"]["telemetry"]["name"] == "x"

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_default_detail(self) -> None:
        assert ServiceError(code="IO_ERROR", message="bad").detail == {}
