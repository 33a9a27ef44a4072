"""Session host: connect/login/disconnect, event fan-out and command dispatch."""

import shlex
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

import structlog

from accounts.credentials import CredentialVerifier

from .session import Session

logger = structlog.get_logger().bind(source="host")

UNKNOWN_COMMAND_MESSAGE = "Invalid command entered. Type /help for a list of valid commands."
NO_PERMISSION_MESSAGE = "You do not have access to this command."
COMMAND_FAILED_MESSAGE = "Command failed, check logs for more details."


class HostError(Exception):
    """Raised for host-level misuse (duplicate display names, unknown sessions)."""


@dataclass
class CommandArgs:
    session: Session
    parameters: list[str]
    text: str = ""


@dataclass
class Command:
    name: str
    handler: Callable[[CommandArgs], None]
    permission: Optional[str] = None
    help_text: str = ""
    aliases: list[str] = field(default_factory=list)

    def names(self) -> list[str]:
        return [self.name, *self.aliases]


class Subscription:
    """Handle for a registration. `release()` is idempotent."""

    def __init__(self, release_fn: Callable[[], None], label: str = ""):
        self._release_fn = release_fn
        self._released = False
        self.label = label

    @property
    def active(self) -> bool:
        return not self._released

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._release_fn()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc) -> None:
        self.release()


class SessionHost:
    """Holds live sessions and fans events out to registered handlers.

    Session-start handlers receive the session after a successful login.
    Tick handlers receive a monotonic clock reading. Handler and command
    exceptions are logged and never reach the caller.
    """

    def __init__(
        self,
        store,
        default_permissions: Iterable[str] = (),
        message_sink=None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store
        self.default_permissions = set(default_permissions)
        self.message_sink = message_sink
        self._clock = clock
        self._verifier = CredentialVerifier(store)
        self._lock = threading.RLock()
        self._sessions: dict[str, Session] = {}
        self._session_start_handlers: list[Callable[[Session], None]] = []
        self._tick_handlers: list[Callable[[float], None]] = []
        self._commands: dict[str, Command] = {}

    # --- registrations ---

    def _remove_from(self, handlers: list, handler) -> Callable[[], None]:
        def release():
            with self._lock:
                if handler in handlers:
                    handlers.remove(handler)

        return release

    def register_session_start(self, handler: Callable[[Session], None]) -> Subscription:
        with self._lock:
            self._session_start_handlers.append(handler)
        return Subscription(self._remove_from(self._session_start_handlers, handler), "session_start")

    def register_tick(self, handler: Callable[[float], None]) -> Subscription:
        with self._lock:
            self._tick_handlers.append(handler)
        return Subscription(self._remove_from(self._tick_handlers, handler), "tick")

    def register_command(self, command: Command) -> Subscription:
        with self._lock:
            for name in command.names():
                if name in self._commands:
                    raise HostError(f"Command '/{name}' is already registered")
            for name in command.names():
                self._commands[name] = command

        def release():
            with self._lock:
                for name in command.names():
                    if self._commands.get(name) is command:
                        del self._commands[name]

        return Subscription(release, f"command:{command.name}")

    def handler_counts(self) -> dict[str, int]:
        with self._lock:
            return {
                "session_start": len(self._session_start_handlers),
                "tick": len(self._tick_handlers),
                "commands": len({id(c) for c in self._commands.values()}),
            }

    # --- sessions ---

    def connect(self, display_name: str, permissions: Optional[Iterable[str]] = None) -> Session:
        if not display_name:
            raise HostError("Display name must not be empty")
        perms = set(self.default_permissions if permissions is None else permissions)
        session = Session(display_name, permissions=perms, sink=self.message_sink)
        with self._lock:
            if display_name in self._sessions:
                raise HostError(f"'{display_name}' is already connected")
            self._sessions[display_name] = session
        logger.info("host.connected", session_id=session.id, display_name=display_name)
        return session

    def disconnect(self, session: Session) -> None:
        with self._lock:
            if self._sessions.get(session.display_name) is session:
                del self._sessions[session.display_name]
        session.account = None
        logger.info("host.disconnected", session_id=session.id, display_name=session.display_name)

    def login(self, session: Session, account_name: str, password: str) -> bool:
        """Bind `session` to the named account if the password matches.

        Fires session-start handlers on success.
        """
        if not self._verifier.verify(account_name, password):
            logger.info("host.login_failed", session_id=session.id, account_name=account_name)
            return False
        account = self.store.get_by_name(account_name)
        if account is None:
            return False
        session.account = account
        logger.info(
            "host.logged_in",
            session_id=session.id,
            account_id=account.id,
            display_name=session.display_name,
        )
        self._fire_session_start(session)
        return True

    def find_session_by_display_name(self, name: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(name)

    def sessions(self) -> list[Session]:
        with self._lock:
            return list(self._sessions.values())

    # --- events ---

    def _fire_session_start(self, session: Session) -> None:
        with self._lock:
            handlers = list(self._session_start_handlers)
        for handler in handlers:
            try:
                handler(session)
            except Exception as e:
                logger.error("host.session_start_handler_failed", session_id=session.id, error=repr(e))

    def tick(self, now: Optional[float] = None) -> None:
        """Run every tick handler once with a clock reading."""
        now = self._clock() if now is None else now
        with self._lock:
            handlers = list(self._tick_handlers)
        for handler in handlers:
            try:
                handler(now)
            except Exception as e:
                logger.error("host.tick_handler_failed", error=repr(e))

    # --- commands ---

    def dispatch(self, session: Session, text: str) -> bool:
        """Run a `/name args...` line for `session`. Returns True if a command ran."""
        text = text.strip()
        if not text.startswith("/"):
            return False
        try:
            parts = shlex.split(text[1:])
        except ValueError:
            parts = text[1:].split()
        if not parts:
            session.send_error(UNKNOWN_COMMAND_MESSAGE)
            return False

        name, parameters = parts[0].lower(), parts[1:]
        with self._lock:
            command = self._commands.get(name)
        if command is None:
            session.send_error(UNKNOWN_COMMAND_MESSAGE)
            return False
        if not session.has_permission(command.permission):
            logger.info("host.permission_denied", session_id=session.id, command=name)
            session.send_error(NO_PERMISSION_MESSAGE)
            return False

        try:
            command.handler(CommandArgs(session=session, parameters=parameters, text=text))
        except Exception as e:
            logger.error("host.command_failed", session_id=session.id, command=name, error=repr(e))
            session.send_error(COMMAND_FAILED_MESSAGE)
        return True
