"""In-process session host: sessions, events, commands and the tick driver."""

from .host import Command, CommandArgs, SessionHost, Subscription
from .scheduler import TickScheduler
from .session import Message, Session

__all__ = [
    "Command",
    "CommandArgs",
    "Message",
    "Session",
    "SessionHost",
    "Subscription",
    "TickScheduler",
]
