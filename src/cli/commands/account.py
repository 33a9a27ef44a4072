"""Account CLI commands."""

import click
from rich.console import Console
from rich.table import Table

from accounts.credentials import hash_password
from accounts.store import AccountStoreError
from cli.utils import get_components

console = Console()


@click.group()
def account():
    """Manage accounts."""
    pass


@account.command("add")
@click.argument("name")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
def account_add(name: str, password: str):
    """Create an account."""
    if not password:
        console.print("[red]Password must not be empty.[/]")
        raise SystemExit(1)
    c = get_components()
    try:
        created = c["store"].create(name, hash_password(password))
    except AccountStoreError as e:
        console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1)
    console.print(f"[green]Created account[/] {created.name} (id {created.id})")


@account.command("list")
@click.option("-n", "--limit", default=50, help="Max accounts to show")
def account_list(limit: int):
    """List accounts."""
    c = get_components()
    accounts = c["store"].list_accounts(limit=limit)
    if not accounts:
        console.print("[yellow]No accounts found.[/]")
        return

    table = Table(show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Created")
    for a in accounts:
        table.add_row(str(a.id), a.name, (a.created_at or "")[:19])
    console.print(table)
