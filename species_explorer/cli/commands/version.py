"""Version command."""

import click
import httpx
from rich.console import Console

from ... import __version__

console = Console()


@click.command()
def version() -> None:
    """Show Species Explorer version.

    Examples:

        species-explorer version
    """
    console.print(f"[bold]Species Explorer[/bold] v{__version__}")
    console.print(f"[dim]httpx {httpx.__version__}[/dim]")
