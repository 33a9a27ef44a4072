"""Interactive session CLI command."""

import click
from rich.console import Console

from cli.utils import get_components, print_message
from host import SessionHost, TickScheduler
from host.host import HostError
from reconcile import NameUpdaterPlugin

console = Console()

QUIT_COMMANDS = {"/quit", "/exit", "/logout"}


@click.command()
@click.argument("account_name")
@click.option("--as", "display_name", help="Display name for the session (defaults to the account name)")
@click.option("--password", prompt=True, hide_input=True, help="Login password")
@click.option("--interval", type=float, help="Override the reminder interval in seconds")
def session(account_name: str, display_name: str | None, password: str, interval: float | None):
    """Log in and run an interactive session. Type /quit to leave."""
    c = get_components()
    config = c["config"]
    store = c["store"]

    host = SessionHost(
        store,
        default_permissions=config.host.default_permissions,
        message_sink=print_message,
    )
    plugin = NameUpdaterPlugin(
        host,
        store,
        reminder_interval=interval or config.reminder.interval_seconds,
        command_name=config.command.name,
        permission=config.command.permission,
    )

    with plugin, TickScheduler(host, tick_seconds=config.reminder.tick_seconds):
        try:
            sess = host.connect(display_name or account_name)
        except HostError as e:
            console.print(f"[red]Error:[/] {e}")
            raise SystemExit(1)

        if not host.login(sess, account_name, password):
            console.print("[red]Invalid user name or password.[/]")
            host.disconnect(sess)
            raise SystemExit(1)

        console.print(f"[dim]Logged in as {account_name}, playing as {sess.display_name}. /quit to leave.[/]")
        stdin = click.get_text_stream("stdin")
        for line in stdin:
            line = line.strip()
            if not line:
                continue
            if line.lower() in QUIT_COMMANDS:
                break
            if not line.startswith("/"):
                console.print(f"<{sess.display_name}> {line}", markup=False, highlight=False)
                continue
            host.dispatch(sess, line)

        host.disconnect(sess)

    plugin.metrics.log_summary()
