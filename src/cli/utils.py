"""Shared CLI utilities."""

import structlog
from rich.console import Console
from rich.text import Text

from shared_types import MessageKind

console = Console()
logger = structlog.get_logger()

_MESSAGE_STYLES = {
    MessageKind.INFO: "yellow",
    MessageKind.ERROR: "red",
    MessageKind.SUCCESS: "green",
}


def get_components():
    """Load config and open the account store."""
    from accounts.store import AccountStore
    from cli.config import load_config

    config = load_config()
    store = AccountStore(config.paths.accounts_db)
    return {"config": config, "store": store}


def print_message(session, message) -> None:
    """Session message sink: render host messages in the terminal."""
    style = _MESSAGE_STYLES.get(message.kind, "white")
    console.print(Text(message.text, style=style))
