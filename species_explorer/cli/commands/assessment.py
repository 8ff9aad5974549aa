"""Assessment command — full details of one assessment."""

import asyncio
import json

import click
from rich.console import Console
from rich.panel import Panel

from ...errors import ServiceError
from ...explorer import SpeciesExplorer
from ...redlist import category_name
from ..app import load_config

console = Console()


@click.command()
@click.argument("assessment_id", type=int)
@click.option("--json", "json_output", is_flag=True, help="Print the raw assessment JSON")
@click.pass_context
def assessment(ctx: click.Context, assessment_id: int, json_output: bool) -> None:
    """Show one Red List assessment.

    Examples:

        species-explorer assessment 1234567

        species-explorer assessment 1234567 --json | jq .taxon
    """
    config = load_config(ctx)
    try:
        detail = asyncio.run(_fetch(config, assessment_id))
    except ServiceError as e:
        console.print(f"[red]Error:[/red] {e}")
        ctx.exit(1)

    if json_output:
        click.echo(json.dumps(detail.raw, indent=2, ensure_ascii=False))
        return

    code = detail.category_code
    lines = [
        f"[bold]{detail.scientific_name}[/bold]",
        f"Common name: {detail.main_common_name or '-'}",
        f"Category: {code} ({category_name(code)})" if code else "Category: -",
        f"Published: {detail.year_published or '-'}",
    ]
    if detail.criteria:
        lines.append(f"Criteria: {detail.criteria}")
    if detail.url:
        lines.append(f"[dim]{detail.url}[/dim]")
    console.print(Panel("\n".join(lines), title=f"Assessment {detail.assessment_id}"))


async def _fetch(config, assessment_id: int):
    async with SpeciesExplorer(config) as explorer:
        return await explorer.get_assessment_by_id(assessment_id)
