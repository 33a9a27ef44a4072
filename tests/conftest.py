"""Shared test fixtures for namesync."""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from accounts.credentials import hash_password
from accounts.store import AccountStore
from host.host import SessionHost
from reconcile.plugin import CONFIRM_PERMISSION


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Minimum bcrypt cost so hashing doesn't dominate test time."""
    monkeypatch.setattr("accounts.credentials.DEFAULT_ROUNDS", 4)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(tmp_path):
    return AccountStore(tmp_path / "accounts.db")


@pytest.fixture
def make_account(store):
    """Create an account with a real bcrypt hash."""

    def _make(name="Alice", password="secret"):
        return store.create(name, hash_password(password))

    return _make


@pytest.fixture
def host(store, clock):
    return SessionHost(store, default_permissions=[CONFIRM_PERMISSION], clock=clock)
