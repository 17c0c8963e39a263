"""
sixpack_sdk.tier1_runtime.outcome
──────────────────────────────────
Tagged result of a single participate/convert attempt. Exactly one Outcome
is produced per call and the library never raises for network results;
callers branch on the variant instead:

    match session.participate("checkout-cta", ["red", "blue"]):
        case Success(value=value):
            render(value["alternative"]["name"])
        case ServerFailure() | TimedOut() | GenericError():
            render("red")
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from sixpack_sdk.tier0_core.errors import RequestTimeoutError, UpstreamError

# Decoded JSON: None | bool | int | float | str | list | dict
JSONValue = Any

TIMED_OUT_MESSAGE = "request timed out"


@dataclass(frozen=True)
class Success:
    """The server (or a forced alternative) produced a decoded JSON value."""
    value: JSONValue
    forced: bool = False

    kind: ClassVar[str] = "success"

    @property
    def ok(self) -> bool:
        return True

    def as_dict(self) -> JSONValue:
        return self.value

    def unwrap(self) -> JSONValue:
        return self.value


@dataclass(frozen=True)
class ServerFailure:
    """
    The server answered 500. Not a fault of the call: the caller decides
    what to show when the experiment service is unhealthy.
    """
    response: str

    status: ClassVar[str] = "failed"
    kind: ClassVar[str] = "failed"

    @property
    def ok(self) -> bool:
        return False

    def as_dict(self) -> dict[str, Any]:
        return {"status": self.status, "response": self.response}

    def unwrap(self) -> dict[str, Any]:
        return self.as_dict()


@dataclass(frozen=True)
class TimedOut:
    """The per-request deadline elapsed before the server answered."""
    message: str = TIMED_OUT_MESSAGE

    kind: ClassVar[str] = "timed_out"

    @property
    def ok(self) -> bool:
        return False

    def as_dict(self) -> dict[str, Any]:
        return {"status": self.kind, "error": self.message}

    def unwrap(self) -> JSONValue:
        raise RequestTimeoutError(user_message=self.message)


@dataclass(frozen=True)
class GenericError:
    """Any other transport or decode fault; ``cause`` is the original exception."""
    cause: BaseException = field(compare=False)

    kind: ClassVar[str] = "error"

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return str(self.cause) or type(self.cause).__name__

    def as_dict(self) -> dict[str, Any]:
        return {"status": self.kind, "error": self.message}

    def unwrap(self) -> JSONValue:
        raise UpstreamError(
            user_message="Sixpack request failed.",
            detail=f"Sixpack request failed: {self.message}",
        ) from self.cause


Outcome = Success | ServerFailure | TimedOut | GenericError


__all__ = [
    "JSONValue", "TIMED_OUT_MESSAGE",
    "Success", "ServerFailure", "TimedOut", "GenericError", "Outcome",
]
