"""Config command implementation."""
import logging
from pathlib import Path
from typing import Optional

import typer

from ..lib.config_loader import DEFAULT_CONFIG_FILE, ConfigLoader
from ..lib.console import safe_echo
from ..lib.errors import ConfigurationError
from ..models.config import example_config

logger = logging.getLogger(__name__)

# Create config subapp
config = typer.Typer(help="Configuration management")


def _load(ctx: typer.Context, loader: Optional[ConfigLoader] = None):
    options = ctx.obj or {}
    loader = loader or ConfigLoader()
    try:
        return loader.load_config(options.get("config_file"))
    except ConfigurationError as e:
        safe_echo(f"[ERROR] {e.message}")
        raise typer.Exit(1)


@config.command()
def show(
    ctx: typer.Context,
    key: Optional[str] = typer.Argument(None, help="Specific configuration key"),
):
    """Show configuration."""
    loader = ConfigLoader()
    config_data = ConfigLoader.masked(_load(ctx, loader))

    if key:
        if key in config_data:
            safe_echo(f"{key} = {config_data[key]}")
            return

        safe_echo(f"[WARNING] Configuration key '{key}' not found")
        safe_echo("Available keys:")
        for k in sorted(config_data):
            safe_echo(f"  - {k}")
        raise typer.Exit(1)

    safe_echo("\nCurrent Configuration:")
    safe_echo("=" * 50)
    for k, v in config_data.items():
        safe_echo(f"  {k} = {v}")
    safe_echo("=" * 50)
    safe_echo(f"Sources: {', '.join(loader.get_config_sources())}")


@config.command()
def validate(ctx: typer.Context):
    """Validate the configuration file."""
    loaded = _load(ctx)
    safe_echo(
        f"[SUCCESS] Configuration is valid "
        f"({loaded.slug}, {loaded.target_year}-{loaded.target_month:02d})"
    )


@config.command()
def init(
    path: Path = typer.Argument(DEFAULT_CONFIG_FILE, help="Where to write the example config"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
):
    """Write an example configuration file."""
    if path.exists() and not force:
        safe_echo(f"[ERROR] {path} already exists, use --force to overwrite")
        raise typer.Exit(1)

    ConfigLoader().export_example(path, example_config())
    safe_echo(f"[SUCCESS] Example configuration written to {path}")
