"""Species Explorer CLI application."""

import os
from pathlib import Path

import click
from rich.console import Console

from .. import __version__
from ..config import ExplorerConfig
from ..utils.logging import setup_logging

console = Console()


def find_config() -> str | None:
    """
    Find config file using standard priority order:

    1. SPECIES_EXPLORER_CONFIG environment variable
    2. .species-explorer.yaml in current directory (project config)
    3. ~/.config/species-explorer/config.yaml (user config)

    Returns None if no config found.
    """
    env_config = os.environ.get("SPECIES_EXPLORER_CONFIG")
    if env_config:
        path = Path(env_config)
        if path.exists():
            return str(path)

    project_config = Path.cwd() / ".species-explorer.yaml"
    if project_config.exists():
        return str(project_config)

    user_config = Path.home() / ".config" / "species-explorer" / "config.yaml"
    if user_config.exists():
        return str(user_config)

    return None


def load_config(ctx: click.Context) -> ExplorerConfig:
    """Config for a subcommand: the file (if any) with env overrides on top."""
    config_path = ctx.obj.get("config")
    base = ExplorerConfig.load(config_path) if config_path else None
    return ExplorerConfig.from_env(base=base)


@click.group()
@click.version_option(version=__version__, prog_name="species-explorer")
@click.option("--config", "-c", type=click.Path(exists=True), help="Config file path")
@click.option("--no-config", is_flag=True, help="Disable config auto-loading")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--debug", is_flag=True, help="Debug logging")
@click.pass_context
def cli(ctx: click.Context, config: str, no_config: bool, verbose: bool, debug: bool) -> None:
    """Species Explorer — IUCN Red List browser with UniProt common names.

    Config file locations (in priority order):

        1. -c/--config PATH (explicit)

        2. SPECIES_EXPLORER_CONFIG env var

        3. .species-explorer.yaml (project config)

        4. ~/.config/species-explorer/config.yaml (user config)

    Examples:

        species-explorer species --page 2

        species-explorer names "Canis lupus" "Felis catus"

        species-explorer check-config
    """
    ctx.ensure_object(dict)

    if no_config:
        config = None
    elif config is None:
        config = find_config()
        if config and verbose:
            console.print(f"[dim]Using config: {config}[/dim]")

    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug

    if debug:
        setup_logging(level="DEBUG")
    elif verbose:
        setup_logging(level="INFO")


# Import and register commands
from .commands import assessment, category, check_config, names, species, version

cli.add_command(species.species)
cli.add_command(assessment.assessment)
cli.add_command(names.names)
cli.add_command(category.category)
cli.add_command(check_config.check_config)
cli.add_command(version.version)
