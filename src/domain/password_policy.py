"""
Password policy - Composite strength rule for new passwords.

Each requirement is an independent FORMAT-stage rule so that every
violated requirement is reported with its own message. Existence checks
(present, string) run in the EXISTENCE stage and gate the policy.
"""

import re

from .validation import Rule, is_string, matches, min_length, not_empty

MIN_PASSWORD_LENGTH = 8

SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

PASSWORD_EMPTY = "Password cannot be empty"
PASSWORD_NOT_STRING = "Password must be a string"
PASSWORD_TOO_SHORT = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
PASSWORD_NO_LETTER = "Password must contain at least one letter"
PASSWORD_NO_NUMBER = "Password must contain at least one number"
PASSWORD_NO_SPECIAL = "Password must contain at least one special character"

MIN_LENGTH_RULE = min_length(MIN_PASSWORD_LENGTH, PASSWORD_TOO_SHORT)
LETTER_RULE = matches(r"[a-zA-Z]", PASSWORD_NO_LETTER)
NUMBER_RULE = matches(r"\d", PASSWORD_NO_NUMBER)
SPECIAL_CHARACTER_RULE = matches(f"[{re.escape(SPECIAL_CHARACTERS)}]", PASSWORD_NO_SPECIAL)

PASSWORD_POLICY: tuple[Rule, ...] = (
    MIN_LENGTH_RULE,
    LETTER_RULE,
    NUMBER_RULE,
    SPECIAL_CHARACTER_RULE,
)

PASSWORD_EXISTENCE: tuple[Rule, ...] = (
    not_empty(PASSWORD_EMPTY),
    is_string(PASSWORD_NOT_STRING),
)


def password_rules() -> tuple[Rule, ...]:
    """Full rule list for a password chosen at registration."""
    return PASSWORD_EXISTENCE + PASSWORD_POLICY


def policy_violations(password: str) -> list[str]:
    """Messages of every policy requirement the password does not meet."""
    return [rule.message for rule in PASSWORD_POLICY if not rule.passes(password)]
