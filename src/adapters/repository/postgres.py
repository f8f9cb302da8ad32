"""
PostgreSQL account store adapter - Implements AccountStore protocol.

This module provides the PostgreSQL implementation of the domain's
store port using psycopg3 with raw SQL.

Atomicity:
---------
1. **insert**: INSERT ... ON CONFLICT ((lower(email))) DO NOTHING. The unique
   index on lower(email) decides races; the loser sees rowcount 0.

2. **mark_verified**: SELECT ... FOR UPDATE locks the row for the duration
   of the transaction, so of two concurrent verifications exactly one
   observes verified = FALSE.

3. **Schema**: a CHECK constraint rejects any row whose verify token is
   present on a verified account (or missing on an unverified one).
"""

import logging
from pathlib import Path
from uuid import UUID

import psycopg
from psycopg_pool import ConnectionPool

from src.domain.account import Account, Unverified, Verified
from src.domain.exceptions import (
    AccountNotFound,
    AlreadyVerified,
    DuplicateEmail,
    StorageUnavailable,
)

logger = logging.getLogger(__name__)

_COLUMNS = "id, email, secret_hash, verified, verify_token, created_at, verified_at"


def _row_to_account(row: tuple) -> Account:
    account_id, email, secret_hash, verified, verify_token, created_at, verified_at = row
    if verified:
        status = Verified(verified_at=verified_at)
    else:
        status = Unverified(verify_token=verify_token)
    return Account(
        id=account_id,
        email=email,
        secret_hash=secret_hash,
        created_at=created_at,
        status=status,
    )


class PostgresAccountStore:
    """
    Implements AccountStore protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize store with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_email(self, email: str) -> Account | None:
        sql = f"SELECT {_COLUMNS} FROM accounts WHERE lower(email) = lower(%s)"
        return self._fetch_one(sql, (email.strip(),))

    def find_by_token(self, token: str) -> Account | None:
        sql = f"SELECT {_COLUMNS} FROM accounts WHERE verify_token = %s AND NOT verified"
        return self._fetch_one(sql, (token,))

    def insert(self, account: Account) -> None:
        """
        Atomically insert a new account.

        The unique index on lower(email) is the arbiter: concurrent inserts
        of the same email serialize on it and all but one affect no rows.

        Raises:
            DuplicateEmail: If the email is already taken
        """
        sql = f"""
            INSERT INTO accounts ({_COLUMNS})
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            ON CONFLICT ((lower(email))) DO NOTHING
        """
        params = (
            account.id,
            account.email,
            account.secret_hash,
            account.verified,
            account.verify_token,
            account.created_at,
            account.verified_at,
        )

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                conn.commit()
                inserted = cursor.rowcount == 1
        except psycopg.Error as exc:
            raise StorageUnavailable("Account insert failed") from exc

        if not inserted:
            raise DuplicateEmail(account.email)

    def mark_verified(self, account_id: UUID) -> Account:
        """
        Transition an account to VERIFIED under a row lock.

        Raises:
            AccountNotFound: If no account has this id
            AlreadyVerified: If the account is already verified
        """
        select_sql = "SELECT verified FROM accounts WHERE id = %s FOR UPDATE"
        update_sql = f"""
            UPDATE accounts
            SET verified = TRUE, verified_at = NOW(), verify_token = NULL
            WHERE id = %s AND NOT verified
            RETURNING {_COLUMNS}
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(select_sql, (account_id,))
                row = cursor.fetchone()

                if row is None or row[0]:
                    conn.commit()
                    updated = None
                else:
                    cursor.execute(update_sql, (account_id,))
                    updated = cursor.fetchone()
                    conn.commit()
        except psycopg.Error as exc:
            raise StorageUnavailable("Account verification update failed") from exc

        if row is None:
            raise AccountNotFound(str(account_id))
        if updated is None:
            raise AlreadyVerified(str(account_id))
        return _row_to_account(updated)

    def ping(self) -> None:
        try:
            with self._pool.connection() as conn:
                conn.execute("SELECT 1")
        except psycopg.Error as exc:
            raise StorageUnavailable("Database unreachable") from exc

    def _fetch_one(self, sql: str, params: tuple) -> Account | None:
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                row = cursor.fetchone()
        except psycopg.Error as exc:
            raise StorageUnavailable("Account lookup failed") from exc
        return _row_to_account(row) if row is not None else None


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
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
