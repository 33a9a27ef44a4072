"""Wires the tracker, handlers and confirm command into a session host."""

import time
from contextlib import ExitStack
from typing import Callable, Optional

import structlog

from accounts.credentials import CredentialVerifier
from accounts.renamer import AccountRenamer
from host.host import Command
from observability import Metrics

from . import messages
from .commands import ConfirmNameCommand
from .handlers import DEFAULT_REMINDER_INTERVAL, SessionEventHandlers
from .tracker import ReconciliationTracker

logger = structlog.get_logger()

PLUGIN_NAME = "Player Account Name Updater"
PLUGIN_VERSION = "1.0.0"
PLUGIN_DESCRIPTION = "Updates player account names by its new player name if they differ."
CONFIRM_PERMISSION = "updateaccountname.confirm"


class NameUpdaterPlugin:
    """Registers on `initialize()` and releases everything on `dispose()`.

    Use as a context manager to get both deterministically:

        with NameUpdaterPlugin(host, store):
            ...
    """

    name = PLUGIN_NAME
    version = PLUGIN_VERSION
    description = PLUGIN_DESCRIPTION

    def __init__(
        self,
        host,
        store,
        reminder_interval: float = DEFAULT_REMINDER_INTERVAL,
        command_name: str = messages.DEFAULT_COMMAND,
        permission: Optional[str] = CONFIRM_PERMISSION,
        clock: Callable[[], float] = time.monotonic,
        metrics: Optional[Metrics] = None,
    ):
        self.host = host
        self.metrics = metrics or Metrics()
        self.tracker = ReconciliationTracker()
        self.handlers = SessionEventHandlers(
            self.tracker,
            host.find_session_by_display_name,
            reminder_interval=reminder_interval,
            command_name=command_name,
            clock=clock,
            metrics=self.metrics,
        )
        self.confirm = ConfirmNameCommand(
            self.tracker,
            CredentialVerifier(store),
            AccountRenamer(store),
            command_name=command_name,
            metrics=self.metrics,
            accounts=store,
        )
        self.command = Command(
            name=command_name,
            handler=self.confirm,
            permission=permission,
            help_text=f"Confirms an account rename: {messages.usage(command_name)}",
        )
        self._subscriptions: Optional[ExitStack] = None

    @property
    def initialized(self) -> bool:
        return self._subscriptions is not None

    def initialize(self) -> None:
        if self._subscriptions is not None:
            return
        with ExitStack() as stack:
            stack.enter_context(self.host.register_session_start(self.handlers.on_session_start))
            stack.enter_context(self.host.register_command(self.command))
            stack.enter_context(self.host.register_tick(self.handlers.on_tick))
            self._subscriptions = stack.pop_all()
        logger.info("plugin.initialized", plugin=self.name, version=self.version)

    def dispose(self) -> None:
        if self._subscriptions is None:
            return
        subscriptions, self._subscriptions = self._subscriptions, None
        subscriptions.close()
        logger.info("plugin.disposed", plugin=self.name, pending=len(self.tracker))

    def __enter__(self) -> "NameUpdaterPlugin":
        self.initialize()
        return self

    def __exit__(self, *exc) -> None:
        self.dispose()
