"""Pending name reconciliations and their reminder timers."""

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional

import structlog

logger = structlog.get_logger()


@dataclass
class PendingReconciliation:
    """One unresolved mismatch, keyed by the display name seen at detection."""

    key: str
    account_id: Optional[int] = None
    last_reminder_at: Optional[float] = None
    opened_at: float = field(default_factory=time.monotonic)


class ReconciliationTracker:
    """Owns the pending map. All access goes through the internal lock.

    `guard()` exposes the same (re-entrant) lock so callers can make a
    check-then-act sequence atomic with respect to other tracker users.
    Entries never expire on their own; only `clear()` removes them.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._pending: dict[str, PendingReconciliation] = {}

    @contextmanager
    def guard(self) -> Iterator[None]:
        with self._lock:
            yield

    def open(self, key: str, account_id: Optional[int] = None) -> bool:
        """Track `key`. Returns False if it was already pending."""
        with self._lock:
            if key in self._pending:
                return False
            self._pending[key] = PendingReconciliation(key=key, account_id=account_id)
        logger.info("tracker.opened", key=key, account_id=account_id)
        return True

    def is_pending(self, key: str) -> bool:
        with self._lock:
            return key in self._pending

    def get(self, key: str) -> Optional[PendingReconciliation]:
        with self._lock:
            entry = self._pending.get(key)
            if entry is None:
                return None
            return PendingReconciliation(
                key=entry.key,
                account_id=entry.account_id,
                last_reminder_at=entry.last_reminder_at,
                opened_at=entry.opened_at,
            )

    def reminder_due(self, key: str, now: float, interval: float) -> bool:
        """Whether a reminder should fire for `key` at `now`.

        The first call after `open()` only arms the timer and returns False.
        """
        with self._lock:
            entry = self._pending.get(key)
            if entry is None:
                return False
            if entry.last_reminder_at is None:
                entry.last_reminder_at = now
                return False
            return now - entry.last_reminder_at >= interval

    def touch(self, key: str, now: float) -> None:
        with self._lock:
            entry = self._pending.get(key)
            if entry is not None:
                entry.last_reminder_at = now

    def clear(self, key: str) -> bool:
        """Drop `key` and its reminder timer. Returns False if it was not pending."""
        with self._lock:
            removed = self._pending.pop(key, None) is not None
        if removed:
            logger.info("tracker.cleared", key=key)
        return removed

    def keys(self) -> list[str]:
        """Snapshot of pending keys."""
        with self._lock:
            return list(self._pending)

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._pending
