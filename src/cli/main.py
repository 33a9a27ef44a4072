"""CLI entry point for namesync."""

import sys
from pathlib import Path

import click

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cli.commands import account, init, session
from cli.config import load_config
from cli.logging_config import setup_logging


@click.group()
@click.version_option(version="1.0.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """namesync - reconcile account names with session display names."""
    config = load_config()
    level = "DEBUG" if verbose else config.logging.level
    setup_logging(json_mode=config.logging.json_mode, level=level, log_file=config.paths.log_file)


cli.add_command(init)
cli.add_command(account)
cli.add_command(session)


if __name__ == "__main__":
    cli()
