"""
Validation engine - Stage-ordered field validation.

This module validates a submitted record against a declarative schema:
an ordered mapping of field name to rule descriptors, each tagged with
a stage. Failures are returned as values, never raised.

Evaluation Rules
================

- Stages run in ascending order per field (EXISTENCE before FORMAT).
  A field's later stage only runs when every rule of its earlier stages passed.
- Fields are independent: one field failing never skips another field.
- Each failing rule contributes exactly one message.
- Multiplicity: by default every failing rule of the first failing stage is
  reported. With stop_at_first_error=True only the first failing rule of each
  field is reported. The flag applies uniformly to every field and rule.
- Undeclared input fields invalidate the whole record.
"""

import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Union

from email_validator import EmailNotValidError, validate_email

BODY_FIELD = "body"


class Stage(IntEnum):
    """Ordered validation phases. Lower values run first."""

    EXISTENCE = 1
    FORMAT = 2


@dataclass(frozen=True)
class Rule:
    """A single check on one field value, with the message reported on failure."""

    stage: Stage
    message: str
    check: Callable[[Any], bool] = field(compare=False)

    def passes(self, value: Any) -> bool:
        return bool(self.check(value))


Schema = Mapping[str, Sequence[Rule]]


@dataclass(frozen=True)
class ValidationError:
    """All violation messages reported for one field, in rule order."""

    field: str
    messages: tuple[str, ...]


ValidationErrorSet = dict[str, ValidationError]


@dataclass(frozen=True)
class Valid:
    """Validation passed. Holds only the declared fields of the input."""

    data: dict[str, Any]


@dataclass(frozen=True)
class Invalid:
    """Validation failed. Holds one ValidationError per failing field."""

    errors: ValidationErrorSet

    def as_dict(self) -> dict[str, list[str]]:
        """Field-keyed message lists, the shape exposed to API clients."""
        return {name: list(error.messages) for name, error in self.errors.items()}


ValidationResult = Union[Valid, Invalid]


def validate(
    schema: Schema, data: Any, *, stop_at_first_error: bool = False
) -> ValidationResult:
    """
    Validate a record against a schema.

    Args:
        schema: Ordered mapping of field name to its rules
        data: Submitted record (normally a decoded JSON object)
        stop_at_first_error: Report only the first failing rule per field

    Returns:
        Valid with the declared fields, or Invalid with the complete error set
    """
    if not isinstance(data, Mapping):
        return Invalid(
            {BODY_FIELD: ValidationError(BODY_FIELD, ("Request body must be a JSON object",))}
        )

    errors: ValidationErrorSet = {}
    for name, rules in schema.items():
        messages = _validate_field(rules, data.get(name), stop_at_first_error)
        if messages:
            errors[name] = ValidationError(name, tuple(messages))

    for name in data:
        if name not in schema:
            errors[name] = ValidationError(name, (f"property {name} should not exist",))

    if errors:
        return Invalid(errors)
    return Valid({name: data.get(name) for name in schema})


def _validate_field(
    rules: Sequence[Rule], value: Any, stop_at_first_error: bool
) -> list[str]:
    for stage in sorted({rule.stage for rule in rules}):
        messages: list[str] = []
        for rule in rules:
            if rule.stage != stage or rule.passes(value):
                continue
            messages.append(rule.message)
            if stop_at_first_error:
                return messages
        if messages:
            return messages
    return []


# Rule constructors


def not_empty(message: str, stage: Stage = Stage.EXISTENCE) -> Rule:
    """Fails for absent values (missing key or null) and empty strings."""
    return Rule(stage, message, lambda value: value is not None and value != "")


def is_string(message: str, stage: Stage = Stage.EXISTENCE) -> Rule:
    return Rule(stage, message, lambda value: isinstance(value, str))


def min_length(length: int, message: str, stage: Stage = Stage.FORMAT) -> Rule:
    return Rule(stage, message, lambda value: isinstance(value, str) and len(value) >= length)


def matches(pattern: str, message: str, stage: Stage = Stage.FORMAT) -> Rule:
    """Passes when the pattern is found anywhere in the string."""
    compiled = re.compile(pattern)
    return Rule(
        stage, message, lambda value: isinstance(value, str) and compiled.search(value) is not None
    )


def is_email(message: str, stage: Stage = Stage.FORMAT) -> Rule:
    """Email syntax check. No DNS lookups are performed."""
    return Rule(stage, message, _is_email_address)


def _is_email_address(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True
