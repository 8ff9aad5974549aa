"""Species command — one browse page of the Red List."""

import asyncio
import json

import click
from rich.console import Console
from rich.table import Table

from ...errors import ServiceError
from ...explorer import SpeciesExplorer
from ...redlist import category_name
from ..app import load_config

console = Console()


@click.command()
@click.option("--page", "-n", type=click.IntRange(min=1), default=1, help="Page number")
@click.option("--json", "json_output", is_flag=True, help="JSON output format")
@click.pass_context
def species(ctx: click.Context, page: int, json_output: bool) -> None:
    """List one page of species with their common names.

    Examples:

        species-explorer species

        species-explorer species --page 3 --json
    """
    config = load_config(ctx)
    try:
        rows = asyncio.run(_fetch_page(config, page))
    except ServiceError as e:
        console.print(f"[red]Error:[/red] {e}")
        ctx.exit(1)

    if json_output:
        click.echo(json.dumps([s.to_dict() for s in rows], indent=2, ensure_ascii=False))
        return

    table = Table(title=f"{config.browse_class.title()} — page {page}")
    table.add_column("Scientific name", style="cyan")
    table.add_column("Common name")
    table.add_column("Category")
    table.add_column("Published", justify="right")
    for s in rows:
        table.add_row(
            s.scientific_name,
            s.main_common_name or "[dim]-[/dim]",
            f"{s.category} ({category_name(s.category)})" if s.category else "-",
            str(s.published_year or "-"),
        )
    console.print(table)


async def _fetch_page(config, page: int):
    async with SpeciesExplorer(config) as explorer:
        return await explorer.get_species_by_page(page)
