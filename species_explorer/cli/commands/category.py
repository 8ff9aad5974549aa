"""Category command — Red List category display attributes."""

import click
from rich.console import Console
from rich.table import Table

from ...redlist import CATEGORY_CODES, category_info

console = Console()


@click.command()
@click.argument("codes", nargs=-1)
def category(codes: tuple) -> None:
    """Show names and display colors of Red List categories.

    Without arguments every category is listed.

    Examples:

        species-explorer category

        species-explorer category CR EN
    """
    table = Table(title="Red List categories")
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    table.add_column("Color")
    for code in codes or CATEGORY_CODES:
        info = category_info(code.upper())
        table.add_row(info.code, info.name, info.color)
    console.print(table)
