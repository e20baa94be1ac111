"""Typed outcomes threaded from the upstream client to the fallback policy."""

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict


class InvalidQuery(ValueError):
    """Raised for query parameters outside their allowed domain."""


class FailureKind(str, Enum):
    UNAUTHENTICATED = "UNAUTHENTICATED"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"


class Success(BaseModel):
    model_config = ConfigDict(frozen=True)

    payload: Any


class Failure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    message: str

    def describe(self) -> str:
        if self.kind is FailureKind.UNAUTHENTICATED:
            return f"Upstream credentials missing or rejected ({self.message})"
        if self.kind is FailureKind.UPSTREAM_UNAVAILABLE:
            return f"Upstream unavailable ({self.message})"
        return f"Upstream returned a malformed response ({self.message})"


Outcome = Union[Success, Failure]
