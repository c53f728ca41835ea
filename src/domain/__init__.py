"""
Domain layer - Pure business logic with zero framework imports.

This package contains the credential validation and authentication
pipeline: the stage-ordered validation engine, the password policy,
and the registration and authentication flows. It defines its own port
interfaces for infrastructure abstraction, ensuring true hexagonal
architecture decoupling.
"""

from .authentication import AuthenticationService
from .exceptions import AccountStoreError, DuplicateKey
from .ports import Account, AccountRepository, PasswordHasher, TokenClaims, TokenService
from .registration import RegistrationService
from .results import ErrorCode, Failure, Ok, Result
from .validation import Invalid, Stage, Valid, ValidationError, ValidationErrorSet, validate

__all__ = [
    "Account",
    "AccountRepository",
    "AccountStoreError",
    "AuthenticationService",
    "DuplicateKey",
    "ErrorCode",
    "Failure",
    "Invalid",
    "Ok",
    "PasswordHasher",
    "RegistrationService",
    "Result",
    "Stage",
    "TokenClaims",
    "TokenService",
    "Valid",
    "ValidationError",
    "ValidationErrorSet",
    "validate",
]
