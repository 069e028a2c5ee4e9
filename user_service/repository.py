"""Database repository for account records."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from psycopg import errors
from psycopg.rows import tuple_row
from psycopg_pool import ConnectionPool

from .domain.account import Account
from .domain.contracts import NewAccountRecord
from .domain.errors import duplicate_email

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS accounts (
    account_id    TEXT PRIMARY KEY,
    first_name    TEXT NOT NULL,
    last_name     TEXT NOT NULL,
    email_id      TEXT NOT NULL,
    password_hash TEXT NOT NULL,
    created_at    TIMESTAMPTZ NOT NULL,
    updated_at    TIMESTAMPTZ NOT NULL,
    CONSTRAINT accounts_email_id_key UNIQUE (email_id)
)
"""

_ACCOUNT_COLUMNS = "account_id, first_name, last_name, email_id, password_hash, created_at, updated_at"


@dataclass(slots=True)
class AccountRecord:
    """Row projection used when mapping database tuples to domain aggregates."""

    account_id: str
    first_name: str
    last_name: str
    email_id: str
    password_hash: str
    created_at: datetime
    updated_at: datetime


def build_pool(database_url: str, timeout_seconds: float) -> ConnectionPool:
    """Create a closed connection pool whose calls are bounded by ``timeout_seconds``."""
    statement_timeout_ms = int(timeout_seconds * 1000)
    return ConnectionPool(
        database_url,
        open=False,
        timeout=timeout_seconds,
        kwargs={"options": f"-c statement_timeout={statement_timeout_ms}"},
    )


class AccountRepository:
    """Postgres-backed account persistence; email uniqueness lives in the schema."""

    def __init__(self, pool: ConnectionPool) -> None:
        """Store the connection pool used for all database interactions."""
        self._pool = pool

    def ensure_schema(self) -> None:
        """Create the accounts table and its unique email constraint if missing."""
        with self._pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
                conn.commit()

    def find_by_email(self, email_id: str) -> Account | None:
        """Return the account registered under ``email_id`` or ``None``."""
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_ACCOUNT_COLUMNS}
                    FROM accounts
                    WHERE email_id = %s
                    """,
                    (email_id,),
                )
                row = cur.fetchone()
                if not row:
                    return None
        return self._map_record(row)

    def list_emails(self) -> list[str]:
        """Return every registered email in creation order."""
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute("SELECT email_id FROM accounts ORDER BY created_at, account_id")
                return [row[0] for row in cur.fetchall()]

    def insert(self, payload: NewAccountRecord) -> Account:
        """Persist a new account; a duplicate email raises ``Conflict``."""
        account_id = str(uuid.uuid4())
        now = datetime.now(timezone.utc)
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=tuple_row) as cur:
                    cur.execute(
                        f"""
                        INSERT INTO accounts ({_ACCOUNT_COLUMNS})
                        VALUES (%s, %s, %s, %s, %s, %s, %s)
                        RETURNING {_ACCOUNT_COLUMNS}
                        """,
                        (
                            account_id,
                            payload.first_name,
                            payload.last_name,
                            payload.email_id,
                            payload.password_hash,
                            now,
                            now,
                        ),
                    )
                    record = cur.fetchone()
                    conn.commit()
        except errors.UniqueViolation as exc:
            logger.info("insert rejected by unique email constraint")
            raise duplicate_email() from exc
        return self._map_record(record)

    def update_profile(self, email_id: str, first_name: str, last_name: str) -> bool:
        """Replace the display names of an account; return whether a row changed."""
        with self._pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE accounts
                    SET first_name = %s, last_name = %s, updated_at = NOW()
                    WHERE email_id = %s
                    """,
                    (first_name, last_name, email_id),
                )
                updated = cur.rowcount
                conn.commit()
        return updated > 0

    def update_password_hash(self, email_id: str, password_hash: str) -> bool:
        """Replace the stored password hash of an account."""
        with self._pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE accounts
                    SET password_hash = %s, updated_at = NOW()
                    WHERE email_id = %s
                    """,
                    (password_hash, email_id),
                )
                updated = cur.rowcount
                conn.commit()
        return updated > 0

    def delete_by_email(self, email_id: str) -> int:
        """Delete the account registered under ``email_id``; return rows removed."""
        with self._pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM accounts WHERE email_id = %s", (email_id,))
                deleted = cur.rowcount
                conn.commit()
        return deleted

    def _map_record(self, row: tuple) -> Account:
        """Convert a raw database tuple into the domain ``Account`` dataclass."""
        record = AccountRecord(*row)
        return Account(
            account_id=record.account_id,
            first_name=record.first_name,
            last_name=record.last_name,
            email_id=record.email_id,
            password_hash=record.password_hash,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
