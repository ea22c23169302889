"""
Structured error values for callrelay.

Failures from configuration, validation and third-party calls are carried
as :class:`RelayError` values inside results rather than raised. They are
turned into the ``error`` string of a JSON response only at the HTTP
boundary.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

MISSING_FIELDS = "missing fields"


class ErrorKind(str, Enum):
    """Categories of failure surfaced to clients."""

    CONFIG_MISSING = "config_missing"
    REMOTE_FAILURE = "remote_failure"
    VALIDATION = "validation"
    UNEXPECTED = "unexpected"


class RelayError(BaseModel):
    """A failure outcome with a kind and a human-readable message.

    Attributes:
        kind: Failure category.
        message: Text placed in the response ``error`` field.
    """

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_exception(
        cls, exc: BaseException, kind: ErrorKind = ErrorKind.UNEXPECTED,
    ) -> RelayError:
        """Wrap *exc*, falling back to its type name when it has no message."""
        return cls(kind=kind, message=str(exc) or type(exc).__name__)

    @classmethod
    def missing_fields(cls) -> RelayError:
        return cls(kind=ErrorKind.VALIDATION, message=MISSING_FIELDS)
