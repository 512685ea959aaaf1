"""The value every service method returns.

Services never raise across their boundary: success carries a payload in
``data``; failure carries a :class:`ServiceError` whose ``code`` is one of
:class:`bankctl.domain.types.ErrorCode`.  The CLI renders either shape.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator


class ServiceError(BaseModel):
    """Why an operation failed."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service call.

    Attributes:
        ok: Whether the operation succeeded; exactly when ``error`` is None.
        op: Operation name, e.g. ``"create_transaction"``.
        data: JSON-ready payload on success.
        warnings: Non-fatal remarks about a successful call.
        error: Set when ``ok`` is False.
        meta: Free-form extra information.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _error_iff_failed(self) -> ServiceResult:
        if self.ok == (self.error is not None):
            state = "successful" if self.ok else "failed"
            msg = f"A {state} result for '{self.op}' must {'not ' if self.ok else ''}carry an error"
            raise ValueError(msg)
        return self
