"""Live session: display name, bound account and outgoing messages."""

import threading
import uuid
from dataclasses import dataclass
from typing import Callable, Optional

from shared_types import MessageKind


@dataclass(frozen=True)
class Message:
    kind: MessageKind
    text: str


class Session:
    """A connection presenting `display_name`, optionally bound to an account.

    Messages are appended to `outbox` and forwarded to `sink` when one is set
    (the CLI uses this to print them).
    """

    def __init__(
        self,
        display_name: str,
        permissions: Optional[set[str]] = None,
        sink: Optional[Callable[["Session", Message], None]] = None,
    ):
        self.id = uuid.uuid4().hex[:8]
        self.display_name = display_name
        self.account = None
        self.permissions: set[str] = set(permissions or ())
        self.outbox: list[Message] = []
        self._sink = sink
        self._lock = threading.Lock()

    @property
    def is_logged_in(self) -> bool:
        return self.account is not None

    def has_permission(self, permission: Optional[str]) -> bool:
        if not permission:
            return True
        return "*" in self.permissions or permission in self.permissions

    def _send(self, kind: MessageKind, text: str) -> None:
        msg = Message(kind=kind, text=text)
        with self._lock:
            self.outbox.append(msg)
        if self._sink is not None:
            self._sink(self, msg)

    def send_info(self, text: str) -> None:
        self._send(MessageKind.INFO, text)

    def send_error(self, text: str) -> None:
        self._send(MessageKind.ERROR, text)

    def send_success(self, text: str) -> None:
        self._send(MessageKind.SUCCESS, text)

    def messages(self, kind: Optional[MessageKind] = None) -> list[str]:
        """Texts sent so far, optionally filtered by kind."""
        with self._lock:
            return [m.text for m in self.outbox if kind is None or m.kind == kind]

    def clear_outbox(self) -> None:
        with self._lock:
            self.outbox.clear()

    def __repr__(self) -> str:
        return f"Session(id={self.id!r}, display_name={self.display_name!r})"
