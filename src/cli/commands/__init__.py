"""CLI command modules."""

from .account import account
from .init import init
from .session import session

__all__ = ["account", "init", "session"]
