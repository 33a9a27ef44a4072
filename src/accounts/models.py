"""Account record as stored in the users table."""

import sqlite3
from dataclasses import dataclass


@dataclass(frozen=True)
class Account:
    """A persisted account. `name` is unique across all accounts."""

    id: int
    name: str
    password_hash: str
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Account":
        return cls(
            id=row["id"],
            name=row["username"],
            password_hash=row["password"],
            created_at=row["created_at"],
        )

    def __repr__(self) -> str:
        # keep hashes out of logs and tracebacks
        return f"Account(id={self.id!r}, name={self.name!r})"
