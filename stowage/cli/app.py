"""
Stowage CLI Application - Built with Click.

Inspection commands for operators:
- config   Show the resolved configuration
- explain  Show what happens to files written to a storage
"""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from stowage import __version__
from stowage.core.config import StowageConfig
from stowage.core.exceptions import ConfigurationError

console = Console()


def _load_config(file: str | None) -> StowageConfig:
    """Load configuration from a file, or from the environment when no file is given."""
    try:
        if file:
            return StowageConfig.from_file(Path(file))
        return StowageConfig.from_env()
    except (FileNotFoundError, ConfigurationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


config_file_option = click.option(
    "--file",
    "-f",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML configuration file (defaults to STOWAGE_* environment variables).",
)


@click.group()
@click.version_option(version=__version__, prog_name="stowage")
def cli():
    """
    Stowage - move-or-copy decisions for file uploads.

    \b
    Commands:
      config   Show the resolved configuration
      explain  Show what happens to files written to a storage
    """


@cli.command("config")
@config_file_option
def config_cmd(file: str | None):
    """Show the resolved configuration."""
    config = _load_config(file)

    table = Table(title="Stowage configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    storages = ", ".join(sorted(config.relocate_to)) or "(none)"
    table.add_row("relocate_to", storages)
    table.add_row("delete_source_on_fallback", str(config.delete_source_on_fallback).lower())
    table.add_row("metrics", str(config.metrics).lower())

    console.print(table)


@cli.command("explain")
@click.argument("storage_key")
@config_file_option
def explain_cmd(storage_key: str, file: str | None):
    """
    Show what happens to files written to STORAGE_KEY.
    """
    config = _load_config(file)

    if not config.policy.prefers_relocation(storage_key):
        console.print(
            f"Files written to [bold]{storage_key}[/bold] are [green]copied[/green]; "
            "sources are left untouched."
        )
        return

    console.print(
        f"Files written to [bold]{storage_key}[/bold] are [green]moved[/green] "
        "when the backend can move them."
    )
    if config.delete_source_on_fallback:
        console.print(
            "[yellow]Otherwise they are copied and the source is deleted (a warning is logged).[/yellow]"
        )
    else:
        console.print(
            "[yellow]Otherwise they are copied and the source is kept (a warning is logged).[/yellow]"
        )


def main():
    cli()


if __name__ == "__main__":
    main()
