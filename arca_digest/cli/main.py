"""arca-digest CLI main entry point.

This module provides the main CLI application using Typer.
"""
import logging
from pathlib import Path
from typing import Optional

import typer

from ..lib.console import setup_console_encoding
from .clean_command import clean
from .config_command import config
from .run_command import run

# Create main app
app = typer.Typer(
    name="arca-digest",
    help="arca.live 채널 월간 결산 도구, 추천수 구간별로 게시글을 정리한 HTML 을 생성",
    no_args_is_help=True,
)

# Add subcommands
app.add_typer(config, name="config", help="설정 관리")
app.command()(run)
app.command()(clean)


# Global options
@app.callback()
def main(
    ctx: typer.Context,
    config_file: Optional[Path] = typer.Option(
        None, "--config-file", help="설정 파일 경로 (기본값: ./config.json)"
    ),
    log_level: str = typer.Option(
        "INFO", "--log-level", help="로그 레벨 [DEBUG|INFO|WARNING|ERROR]"
    ),
):
    """arca-digest - arca.live 채널 월간 결산 도구."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    ctx.obj = {
        "config_file": config_file,
        "log_level": log_level,
    }


def cli() -> None:
    """Console script entry point."""
    setup_console_encoding()
    app()


if __name__ == "__main__":
    cli()
