"""Tests for SessionEventHandlers: detection on login and the reminder sweep."""

import pytest

from accounts.models import Account
from host.session import Session
from observability import Metrics
from reconcile import messages
from reconcile.handlers import SessionEventHandlers
from reconcile.tracker import ReconciliationTracker
from shared_types import MessageKind


def _session(display_name="Alice99", account_name="Alice", account_id=1):
    s = Session(display_name)
    if account_name is not None:
        s.account = Account(id=account_id, name=account_name, password_hash="h")
    return s


@pytest.fixture
def sessions():
    return {}


@pytest.fixture
def tracker():
    return ReconciliationTracker()


@pytest.fixture
def handlers(tracker, sessions, clock):
    return SessionEventHandlers(
        tracker,
        sessions.get,
        reminder_interval=600,
        clock=clock,
        metrics=Metrics(),
    )


def test_mismatch_opens_entry_and_sends_two_infos(handlers, tracker):
    s = _session()
    handlers.on_session_start(s)

    assert tracker.keys() == ["Alice99"]
    assert s.messages(MessageKind.INFO) == [
        messages.mismatch_detected("Alice", "Alice99"),
        messages.how_to_confirm(),
    ]
    assert s.messages() == s.messages(MessageKind.INFO)
    assert "(Alice)" in s.messages()[0] and "(Alice99)" in s.messages()[0]
    assert s.messages()[1] == "To update your account name, use: /confirmname <password>"


def test_matching_names_is_noop(handlers, tracker):
    s = _session(display_name="Alice", account_name="Alice")
    handlers.on_session_start(s)
    assert len(tracker) == 0
    assert s.outbox == []


def test_unauthenticated_is_noop(handlers, tracker):
    s = _session(account_name=None)
    handlers.on_session_start(s)
    assert len(tracker) == 0
    assert s.outbox == []


def test_redetection_keeps_single_entry_but_renotifies(handlers, tracker):
    s = _session()
    handlers.on_session_start(s)
    handlers.on_session_start(s)
    assert tracker.keys() == ["Alice99"]
    assert len(s.messages()) == 4
    assert handlers.metrics.get("mismatch_detected") == 1


def test_first_tick_arms_without_reminder(handlers, tracker, sessions, clock):
    s = _session()
    sessions[s.display_name] = s
    handlers.on_session_start(s)
    s.clear_outbox()

    assert handlers.on_tick() == 0
    assert s.outbox == []
    assert tracker.get("Alice99").last_reminder_at == clock.now


def test_reminder_after_interval(handlers, sessions, clock):
    s = _session()
    sessions[s.display_name] = s
    handlers.on_session_start(s)
    s.clear_outbox()

    handlers.on_tick()
    clock.advance(599)
    assert handlers.on_tick() == 0
    clock.advance(1)
    assert handlers.on_tick() == 1
    assert s.messages() == [
        "Reminder: Your account name differs from your player name.",
        "Use: /confirmname <password> to update your account name.",
    ]

    # re-armed: nothing until another full interval
    s.clear_outbox()
    clock.advance(300)
    assert handlers.on_tick() == 0
    clock.advance(300)
    assert handlers.on_tick() == 1
    assert handlers.metrics.get("reminders_sent") == 2


def test_explicit_now_overrides_clock(handlers, sessions):
    s = _session()
    sessions[s.display_name] = s
    handlers.on_session_start(s)
    handlers.on_tick(now=0.0)
    assert handlers.on_tick(now=600.0) == 1


def test_disconnected_session_is_skipped_and_entry_kept(handlers, tracker, sessions, clock):
    s = _session()
    handlers.on_session_start(s)
    clock.advance(10_000)
    assert handlers.on_tick() == 0
    assert tracker.is_pending("Alice99")
    # never armed while nobody was there
    assert tracker.get("Alice99").last_reminder_at is None


def test_reconnect_under_same_name_resumes(handlers, tracker, sessions, clock):
    first = _session()
    handlers.on_session_start(first)

    again = _session()
    sessions[again.display_name] = again
    handlers.on_tick()
    clock.advance(600)
    assert handlers.on_tick() == 1
    assert len(again.messages()) == 2


def test_logged_out_session_is_skipped(handlers, tracker, sessions, clock):
    s = _session()
    sessions[s.display_name] = s
    handlers.on_session_start(s)
    s.account = None
    s.clear_outbox()
    handlers.on_tick()
    clock.advance(600)
    assert handlers.on_tick() == 0
    assert s.outbox == []


def test_custom_command_name_in_messages(tracker, sessions, clock):
    h = SessionEventHandlers(tracker, sessions.get, command_name="fixname", clock=clock)
    s = _session()
    h.on_session_start(s)
    assert s.messages()[1] == "To update your account name, use: /fixname <password>"


def test_rejects_non_positive_interval(tracker, sessions):
    with pytest.raises(ValueError):
        SessionEventHandlers(tracker, sessions.get, reminder_interval=0)
