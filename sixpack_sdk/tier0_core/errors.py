"""
sixpack_sdk.tier0_core.errors
──────────────────────────────
Standard error taxonomy for the Sixpack client. Every error has a stable
machine-readable code, a user-safe message and internal detail.

Only input problems are raised by the client itself. Network outcomes
(timeouts, server failures, transport faults) are returned as Outcome
values; UpstreamError and RequestTimeoutError are raised only when a
caller asks an Outcome to unwrap().
"""
from __future__ import annotations

from typing import Any


# ── Base error ────────────────────────────────────────────────────────────────

class SixpackError(Exception):
    """
    Base class for all client errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - user_message: safe to surface to end users
    - detail: internal context, never shown to users
    """

    code: str = "sixpack_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "An unexpected error occurred.",
        detail: str | None = None,
        **metadata: Any,
    ) -> None:
        self.code = code or self.__class__.code
        self.user_message = user_message
        self.detail = detail or user_message
        self.metadata = metadata
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.user_message,
            }
        }


# ── Input validation ──────────────────────────────────────────────────────────

class ValidationError(SixpackError):
    """Input validation failure. Raised before any request is built."""
    code = "validation_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "Validation failed.",
        fields: dict | None = None,
        **metadata: Any,
    ) -> None:
        self.fields = fields or {}
        super().__init__(code, user_message, **metadata)

    def to_dict(self) -> dict:
        d = super().to_dict()
        if self.fields:
            d["error"]["fields"] = self.fields
        return d


class InvalidName(ValidationError):
    """An experiment or alternative name does not match the naming grammar."""
    code = "invalid_name"

    def __init__(self, field: str, value: Any) -> None:
        self.field = field
        self.value = value
        super().__init__(
            user_message=f"Bad {field}: {value!r}",
            fields={field: value},
        )


class InvalidKpi(ValidationError):
    """A KPI name does not match the naming grammar."""
    code = "invalid_kpi"

    def __init__(self, value: Any, field: str = "kpi") -> None:
        self.field = field
        self.value = value
        super().__init__(
            user_message=f"Bad kpi: {value!r}",
            fields={field: value},
        )


class InsufficientAlternatives(ValidationError):
    """Fewer than two alternatives were supplied to participate."""
    code = "insufficient_alternatives"

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(
            user_message="Must specify at least 2 alternatives",
            fields={"alternatives": count},
        )


# ── Network / configuration ───────────────────────────────────────────────────

class UpstreamError(SixpackError):
    """The Sixpack server could not be reached or answered unusably."""
    code = "upstream_error"


class RequestTimeoutError(UpstreamError):
    """The request deadline elapsed before the server answered."""
    code = "request_timed_out"


class ConfigurationError(SixpackError):
    """Misconfiguration detected when building a session."""
    code = "configuration_error"


__all__ = [
    "SixpackError", "ValidationError", "InvalidName", "InvalidKpi",
    "InsufficientAlternatives", "UpstreamError", "RequestTimeoutError",
    "ConfigurationError",
]
