"""Run command implementation."""
import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer

from ..lib.config_loader import ConfigLoader
from ..lib.console import safe_echo
from ..lib.errors import ConfigurationError, DigestError
from ..services.digest_service import DigestService

logger = logging.getLogger(__name__)


def run(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(
        None, "--output", help="Output HTML path (default: output_path in config)"
    ),
    login: Optional[bool] = typer.Option(
        None, "--login/--no-login", help="Override need_login from config"
    ),
):
    """Collect the target month and write the digest report."""
    options = ctx.obj or {}

    try:
        config = ConfigLoader().load_config(options.get("config_file"))
    except ConfigurationError as e:
        safe_echo(f"[ERROR] {e.message}")
        raise typer.Exit(1)

    safe_echo(f"[DIGEST] Channel: {config.slug}")
    safe_echo(f"[DIGEST] Target: {config.target_year}-{config.target_month:02d}")
    safe_echo(f"[DIGEST] Categories: {', '.join(repr(c) for c in config.category)}")

    try:
        summary = asyncio.run(
            DigestService.from_config(config).run(output_path=output, login=login)
        )
    except DigestError as e:
        safe_echo(f"[ERROR] Digest failed: {e}")
        logger.error(f"Run command failed: {e}")
        raise typer.Exit(1)

    safe_echo(f"[SUCCESS] {summary['title']}")
    safe_echo(f"[STATS] Articles: {summary['total']}")
    for label, count in summary["buckets"].items():
        safe_echo(f"[STATS]   {label}: {count}")
    safe_echo(f"[STATS] Duration: {summary['execution_time']:.2f} seconds")
    safe_echo(f"[OUTPUT] Report saved to: {summary['output']}")
