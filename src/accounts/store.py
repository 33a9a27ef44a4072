"""SQLite account table: lookup by id/name, create, list, rename."""

import sqlite3
from datetime import datetime, timezone
from pathlib import Path

import structlog

from db import wal_connect

from .models import Account

logger = structlog.get_logger()


class AccountStoreError(Exception):
    """Persistence failure in the account table."""


class DuplicateAccountError(AccountStoreError):
    """Another account already owns the requested name."""


class AccountStore:
    """SQLite persistence for accounts (`users` table)."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path).expanduser()
        self._init_tables()

    def _connect(self) -> sqlite3.Connection:
        return wal_connect(self.db_path)

    def _init_tables(self):
        conn = self._connect()
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    username TEXT NOT NULL UNIQUE,
                    password TEXT NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def create(self, name: str, password_hash: str) -> Account:
        """Insert a new account. Raises DuplicateAccountError if the name is taken."""
        now = datetime.now(timezone.utc).isoformat()
        conn = self._connect()
        try:
            cur = conn.execute(
                "INSERT INTO users (username, password, created_at) VALUES (?, ?, ?)",
                (name, password_hash, now),
            )
            conn.commit()
            account_id = cur.lastrowid
        except sqlite3.IntegrityError as e:
            raise DuplicateAccountError(f"Account '{name}' already exists") from e
        except sqlite3.Error as e:
            raise AccountStoreError(str(e)) from e
        finally:
            conn.close()
        logger.info("account_store.created", account_id=account_id, name=name)
        return Account(id=account_id, name=name, password_hash=password_hash, created_at=now)

    def get_by_id(self, account_id: int) -> Account | None:
        conn = self._connect()
        try:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (account_id,)).fetchone()
        finally:
            conn.close()
        return Account.from_row(row) if row else None

    def get_by_name(self, name: str) -> Account | None:
        """Exact, case-sensitive lookup by account name."""
        conn = self._connect()
        try:
            row = conn.execute("SELECT * FROM users WHERE username = ?", (name,)).fetchone()
        finally:
            conn.close()
        return Account.from_row(row) if row else None

    def list_accounts(self, limit: int = 100) -> list[Account]:
        conn = self._connect()
        try:
            rows = conn.execute(
                "SELECT * FROM users ORDER BY id ASC LIMIT ?", (limit,)
            ).fetchall()
        finally:
            conn.close()
        return [Account.from_row(r) for r in rows]

    def rename(self, account_id: int, new_name: str) -> None:
        """Set the account's name.

        Raises:
            DuplicateAccountError: the unique constraint rejected `new_name`.
            AccountStoreError: any other database failure, or no such account.
        """
        conn = self._connect()
        try:
            cur = conn.execute(
                "UPDATE users SET username = ? WHERE id = ?", (new_name, account_id)
            )
            conn.commit()
        except sqlite3.IntegrityError as e:
            raise DuplicateAccountError(f"Account '{new_name}' already exists") from e
        except sqlite3.Error as e:
            raise AccountStoreError(str(e)) from e
        finally:
            conn.close()
        if cur.rowcount == 0:
            raise AccountStoreError(f"No account with id {account_id}")
        logger.info("account_store.renamed", account_id=account_id, new_name=new_name)
