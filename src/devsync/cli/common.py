"""Options and setup shared by the pull and push commands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from devsync.core.config import load_config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

config_option = click.option(
    "--config",
    "config_file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="YAML config file (default: $DEVSYNC_CONFIG or ./devsync.yaml).",
)

verbose_option = click.option(
    "--verbose", "-v", is_flag=True, help="Enable debug logging."
)


def setup_logging(verbose: bool) -> None:
    """Log to stderr; WARNING by default, DEBUG with --verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


def load_cli_config(config_file: Path | None) -> dict:
    if config_file is not None and not config_file.exists():
        raise click.ClickException(f"Config file not found: {config_file}")
    return load_config(config_file)
