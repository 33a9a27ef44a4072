"""Session-start detection and the periodic reminder sweep."""

import time
from typing import Callable, Optional

import structlog

from observability import Metrics

from . import messages
from .tracker import ReconciliationTracker

logger = structlog.get_logger()

DEFAULT_REMINDER_INTERVAL = 600.0


class SessionEventHandlers:
    """Opens pending entries on login and reminds users while they stay open."""

    def __init__(
        self,
        tracker: ReconciliationTracker,
        find_session: Callable[[str], Optional[object]],
        reminder_interval: float = DEFAULT_REMINDER_INTERVAL,
        command_name: str = messages.DEFAULT_COMMAND,
        clock: Callable[[], float] = time.monotonic,
        metrics: Optional[Metrics] = None,
    ):
        if reminder_interval <= 0:
            raise ValueError(f"reminder_interval must be positive, got {reminder_interval}")
        self.tracker = tracker
        self.find_session = find_session
        self.reminder_interval = reminder_interval
        self.command_name = command_name
        self._clock = clock
        self.metrics = metrics or Metrics()

    def on_session_start(self, session) -> None:
        account = session.account
        if account is None:
            return
        if account.name == session.display_name:
            return

        created = self.tracker.open(session.display_name, account_id=account.id)
        if created:
            self.metrics.counter("mismatch_detected")
        logger.info(
            "reconcile.mismatch",
            account_id=account.id,
            account_name=account.name,
            display_name=session.display_name,
            new_entry=created,
        )
        session.send_info(messages.mismatch_detected(account.name, session.display_name))
        session.send_info(messages.how_to_confirm(self.command_name))

    def on_tick(self, now: Optional[float] = None) -> int:
        """Sweep pending keys once. Returns the number of reminders sent."""
        now = self._clock() if now is None else now
        sent = 0
        for key in self.tracker.keys():
            session = self.find_session(key)
            if session is None or not session.is_logged_in:
                continue
            with self.tracker.guard():
                if not self.tracker.reminder_due(key, now, self.reminder_interval):
                    continue
                session.send_info(messages.REMINDER)
                session.send_info(messages.reminder_how_to(self.command_name))
                self.tracker.touch(key, now)
            sent += 1
        if sent:
            self.metrics.counter("reminders_sent", sent)
            logger.debug("reconcile.reminders_sent", count=sent)
        return sent
