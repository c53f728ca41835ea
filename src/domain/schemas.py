"""
Input schemas - Declarative validation rules for registration and login.

Login applies only the existence checks to the password; the strength
policy is enforced when a password is chosen, not when it is presented.
"""

from .password_policy import PASSWORD_EXISTENCE, password_rules
from .validation import Rule, Schema, is_email, is_string, min_length, not_empty

MIN_NAME_LENGTH = 3


def _email_existence() -> tuple[Rule, ...]:
    return (
        not_empty("Email cannot be empty"),
        is_string("Email must be a string"),
    )


REGISTRATION_SCHEMA: Schema = {
    "name": (
        not_empty("Name cannot be empty"),
        is_string("Name must be a string"),
        min_length(MIN_NAME_LENGTH, f"Name must be at least {MIN_NAME_LENGTH} characters long"),
    ),
    "email": _email_existence() + (is_email("Please provide a valid email address"),),
    "password": password_rules(),
}

LOGIN_SCHEMA: Schema = {
    "email": _email_existence() + (is_email("Invalid email"),),
    "password": PASSWORD_EXISTENCE,
}
