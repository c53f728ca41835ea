"""
Domain exceptions - Error types raised at the account store boundary.

Store adapters raise these so that domain services can tell a uniqueness
conflict apart from any other storage failure without seeing driver errors.
Services catch them and return Failure outcomes instead.
"""


class AccountStoreError(Exception):
    """Base class for account store failures."""

    pass


class DuplicateKey(AccountStoreError):
    """An account with this email already exists."""

    pass
