"""Result envelope returned by every imd service call.

Services never raise for expected failures (missing documents, malformed
payloads); they return ``ServiceResult(ok=False)`` with a
:class:`ServiceError` whose ``code`` is one of :data:`ERROR_CODES`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

ERROR_CODES = frozenset({"NOT_FOUND", "MALFORMED_PAYLOAD", "KEY_DERIVATION_FAILED"})


class ServiceError(BaseModel):
    """Why a service call failed."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: True unless ``error`` is set.
        op: Operation name; output renderers dispatch on it.
        data: Operation payload.
        warnings: Recoverable problems, e.g. a secret that did not decrypt.
        error: Populated when ``ok`` is False.
        meta: Free-form extras shown by verbose output.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def success(
        cls, op: str, data: Mapping[str, Any], *, warnings: list[str] | None = None
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=dict(data), warnings=warnings or [])

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        if code not in ERROR_CODES:
            raise ValueError(f"Unknown service error code: {code}")
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
