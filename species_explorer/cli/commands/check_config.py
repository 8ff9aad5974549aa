"""Check-config command — verify required settings are present."""

import click
from rich.console import Console

from ...config import ENV_PREFIX
from ..app import load_config

console = Console()


@click.command("check-config")
@click.pass_context
def check_config(ctx: click.Context) -> None:
    """Check that all required settings are configured.

    Exits with status 1 when something is missing.

    Examples:

        species-explorer check-config

        SPECIES_EXPLORER_BACKEND_BASE_URL=http://localhost:3001 species-explorer check-config
    """
    config = load_config(ctx)
    missing = config.missing_settings()
    if not missing:
        console.print("[green]✓[/green] Configuration complete")
        return

    console.print("[red]✗[/red] Missing required settings:")
    for name in missing:
        console.print(f"  - {name} [dim]({ENV_PREFIX}{name.upper()})[/dim]")
    ctx.exit(1)
