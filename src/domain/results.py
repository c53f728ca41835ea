"""
Flow outcomes - Tagged result values returned by domain services.

Expected failures (invalid input, duplicate email, bad credentials,
rejected tokens) are returned as Failure values rather than raised.
The API layer maps each ErrorCode to a protocol-level response.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar, Union

from .validation import ValidationErrorSet

T = TypeVar("T")


class ErrorCode(str, Enum):
    """Failure kinds a flow can report."""

    VALIDATION_FAILED = "validation_failed"
    DUPLICATE_EMAIL = "duplicate_email"
    REGISTRATION_FAILED = "registration_failed"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_TOKEN = "invalid_token"
    EXPIRED_TOKEN = "expired_token"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying the flow's value."""

    value: T


@dataclass(frozen=True)
class Failure:
    """
    Failed outcome.

    validation_errors is only populated for VALIDATION_FAILED.
    """

    code: ErrorCode
    validation_errors: ValidationErrorSet = field(default_factory=dict)


Result = Union[Ok[T], Failure]
