"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from improved_markdown.services.result import ERROR_CODES, ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="resolve_path", data={"path": "/a/c"})
        assert result.ok is True
        assert result.op == "resolve_path"
        assert result.data == {"path": "/a/c"}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="NOT_FOUND", message="No document at /x.md")
        result = ServiceResult(ok=False, op="render", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_failure_helper(self) -> None:
        result = ServiceResult.failure("decrypt", "MALFORMED_PAYLOAD", "bad base64", length=3)
        assert result.ok is False
        assert result.op == "decrypt"
        assert result.error == ServiceError(
            code="MALFORMED_PAYLOAD", message="bad base64", detail={"length": 3}
        )

    def test_json_serialization(self) -> None:
        result = ServiceResult(
            ok=True,
            op="encrypt",
            data={"payload": "AAAA"},
            meta={"duration_ms": 42},
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["payload"] == "AAAA"
        assert parsed["meta"]["duration_ms"] == 42

    def test_success_helper(self) -> None:
        result = ServiceResult.success("dirname", {"input": "/a/b", "path": "/a"})
        assert result.ok is True
        assert result.data == {"input": "/a/b", "path": "/a"}
        assert result.warnings == []

    def test_service_codes_are_known(self) -> None:
        assert {"NOT_FOUND", "MALFORMED_PAYLOAD", "KEY_DERIVATION_FAILED"} == ERROR_CODES

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_failure_rejects_unknown_code(self) -> None:
        with pytest.raises(ValueError, match="Unknown service error code"):
            ServiceResult.failure("render", "OOPS", "nope")
