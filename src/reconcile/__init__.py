"""Name reconciliation: detection, reminders and the confirm command."""

from .commands import ConfirmNameCommand
from .handlers import DEFAULT_REMINDER_INTERVAL, SessionEventHandlers
from .plugin import CONFIRM_PERMISSION, NameUpdaterPlugin
from .tracker import PendingReconciliation, ReconciliationTracker

__all__ = [
    "CONFIRM_PERMISSION",
    "DEFAULT_REMINDER_INTERVAL",
    "ConfirmNameCommand",
    "NameUpdaterPlugin",
    "PendingReconciliation",
    "ReconciliationTracker",
    "SessionEventHandlers",
]
