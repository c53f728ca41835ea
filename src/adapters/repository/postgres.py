"""
PostgreSQL repository adapter - Implements AccountRepository protocol.

This module provides the PostgreSQL implementation of the domain's
account store port using psycopg3 with raw SQL.

Uniqueness: the UNIQUE constraint on accounts.email is the authoritative
guard against duplicate registrations. A UniqueViolation raised by the
INSERT is translated to the domain's DuplicateKey so that the
registration service can report it like any other duplicate.
"""

import logging
import uuid
from pathlib import Path
from typing import Optional

from psycopg import errors
from psycopg_pool import ConnectionPool

from src.domain.exceptions import DuplicateKey
from src.domain.ports import Account

logger = logging.getLogger(__name__)

_ACCOUNT_COLUMNS = "id::text, name, email, password_hash"


class PostgresAccountRepository:
    """
    Implements AccountRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_email(self, email: str) -> Optional[Account]:
        """
        Fetch account by normalized email.

        Args:
            email: Normalized email address (lowercase, stripped)

        Returns:
            Account if found, None otherwise
        """
        sql = f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE email = %s"
        return self._fetch_one(sql, (email,))

    def find_by_id(self, account_id: str) -> Optional[Account]:
        """
        Fetch account by identifier.

        Identifiers that are not valid UUIDs cannot match any row and
        return None instead of raising a driver error.
        """
        try:
            key = uuid.UUID(account_id)
        except ValueError:
            return None

        sql = f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE id = %s"
        return self._fetch_one(sql, (key,))

    def create(self, name: str, email: str, password_hash: str) -> Account:
        """
        Insert a new account; the database assigns its id.

        Args:
            name: Display name
            email: Normalized email address
            password_hash: bcrypt-hashed password from the domain layer

        Returns:
            The created Account

        Raises:
            DuplicateKey: If the email is already registered
        """
        sql = f"""
            INSERT INTO accounts (name, email, password_hash)
            VALUES (%s, %s, %s)
            RETURNING {_ACCOUNT_COLUMNS}
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (name, email, password_hash))
                row = cursor.fetchone()
                conn.commit()
        except errors.UniqueViolation as e:
            raise DuplicateKey(email) from e

        return Account(id=row[0], name=row[1], email=row[2], password_hash=row[3])

    def _fetch_one(self, sql: str, params: tuple) -> Optional[Account]:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, params)
            row = cursor.fetchone()

        if row is None:
            return None
        return Account(id=row[0], name=row[1], email=row[2], password_hash=row[3])


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
