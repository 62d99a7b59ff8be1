"""Clean command implementation."""
import logging
from pathlib import Path

import typer

from ..lib.config_loader import ConfigLoader
from ..lib.console import safe_echo
from ..lib.errors import ConfigurationError
from ..models.config import DEFAULT_CONFIG, ConfigKey

logger = logging.getLogger(__name__)


def _target_paths(ctx: typer.Context) -> dict[str, Path]:
    """Cookie and output paths from config, or the defaults without one."""
    options = ctx.obj or {}
    try:
        loaded = ConfigLoader().load_config(options.get("config_file"))
        return {"cookies": Path(loaded.cookie_path), "output": Path(loaded.output_path)}
    except ConfigurationError as e:
        logger.warning(f"Using default paths: {e}")
        return {
            "cookies": Path(DEFAULT_CONFIG[ConfigKey.COOKIE_PATH]),
            "output": Path(DEFAULT_CONFIG[ConfigKey.OUTPUT_PATH]),
        }


def clean(
    ctx: typer.Context,
    cookies: bool = typer.Option(False, "--cookies", help="Remove the saved cookie jar"),
    output: bool = typer.Option(False, "--output", help="Remove the generated report"),
    confirm: bool = typer.Option(
        True, "--confirm/--no-confirm", help="Whether confirmation is required"
    ),
):
    """Remove the saved session and generated files."""
    if not (cookies or output):
        safe_echo("[WARNING] No cleaning options selected")
        safe_echo("Available options: --cookies, --output")
        return

    paths = _target_paths(ctx)
    selected = [name for name, flag in (("cookies", cookies), ("output", output)) if flag]

    if confirm:
        for name in selected:
            safe_echo(f"[CLEAN] {name}: {paths[name]}")
        if not typer.confirm("Do you want to continue?"):
            safe_echo("[CANCELLED] Cleaning operation cancelled")
            return

    for name in selected:
        path = paths[name]
        if path.exists():
            path.unlink()
            safe_echo(f"[CLEAN] Removed {path}")
        else:
            safe_echo(f"[CLEAN] Nothing to remove at {path}")
