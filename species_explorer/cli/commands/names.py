"""Names command — common-name lookup in the UniProt species list."""

import asyncio

import click
from rich.console import Console
from rich.table import Table

from ...explorer import SpeciesExplorer
from ..app import load_config

console = Console()


@click.command()
@click.argument("scientific_names", nargs=-1, required=True)
@click.pass_context
def names(ctx: click.Context, scientific_names: tuple) -> None:
    """Look up common names for scientific names.

    Examples:

        species-explorer names "Canis lupus"

        species-explorer names "Felis catus" "Panthera leo"
    """
    config = load_config(ctx)
    found, error = asyncio.run(_lookup(config, list(scientific_names)))

    if error is not None:
        console.print(f"[yellow]Species list unavailable:[/yellow] {error}")

    table = Table()
    table.add_column("Scientific name", style="cyan")
    table.add_column("Common name")
    for name in scientific_names:
        table.add_row(name, found.get(name, "[dim]not found[/dim]"))
    console.print(table)


async def _lookup(config, scientific_names: list):
    async with SpeciesExplorer(config) as explorer:
        found = await explorer.get_common_names(scientific_names)
        return found, explorer.loader.last_error
