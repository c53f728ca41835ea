"""
In-memory repository adapter - Implements AccountRepository protocol.

Keeps accounts in process memory. Used by the test suite and for running
the API without a database. A lock makes lookup-then-insert atomic so the
uniqueness guarantee matches the PostgreSQL UNIQUE constraint.
"""

import threading
import uuid
from typing import Optional

from src.domain.exceptions import DuplicateKey
from src.domain.ports import Account


class InMemoryAccountRepository:
    """
    Implements AccountRepository protocol with dictionaries.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_id: dict[str, Account] = {}
        self._id_by_email: dict[str, str] = {}

    def find_by_email(self, email: str) -> Optional[Account]:
        with self._lock:
            account_id = self._id_by_email.get(email)
            return self._by_id.get(account_id) if account_id is not None else None

    def find_by_id(self, account_id: str) -> Optional[Account]:
        with self._lock:
            return self._by_id.get(account_id)

    def create(self, name: str, email: str, password_hash: str) -> Account:
        """
        Store a new account with a generated UUID.

        Raises:
            DuplicateKey: If the email is already registered
        """
        with self._lock:
            if email in self._id_by_email:
                raise DuplicateKey(email)
            account = Account(
                id=str(uuid.uuid4()), name=name, email=email, password_hash=password_hash
            )
            self._by_id[account.id] = account
            self._id_by_email[email] = account.id
            return account

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)
