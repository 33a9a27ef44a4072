"""Init CLI command."""

from pathlib import Path

import click
import yaml
from rich.console import Console

from cli.config import find_config

console = Console()

MINIMAL_CONFIG = {
    "reminder": {"interval_seconds": 600, "tick_seconds": 1.0},
    "command": {"name": "confirmname", "permission": "updateaccountname.confirm"},
    "paths": {"accounts_db": "~/namesync/accounts.db"},
    "logging": {"level": "INFO"},
}


@click.command()
@click.option(
    "--config-path",
    type=click.Path(path_type=Path),
    default=Path("~/namesync/config.yaml"),
    show_default=True,
    help="Where to write the config file",
)
def init(config_path: Path):
    """Write a starter config and create the account database."""
    from cli.utils import get_components

    config_path = config_path.expanduser()
    existing = find_config()
    if existing is None and not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(yaml.safe_dump(MINIMAL_CONFIG, sort_keys=False))
        console.print(f"[green]Wrote config:[/] {config_path}")
    else:
        console.print(f"[dim]Using existing config: {existing or config_path}[/]")

    c = get_components()
    console.print(f"[green]Account database ready:[/] {c['store'].db_path}")
