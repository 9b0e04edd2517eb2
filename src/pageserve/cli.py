"""CLI interface for pageserve.

Command-line tool for serving cached content pages.
"""

import logging
import sys
from pathlib import Path

import click

from pageserve.config import Config
from pageserve.core.cache import SeedError

CONFIG_OPTION_HELP = "Path to configuration file (default: auto-discover pageserve.toml)"


@click.group()
def cli() -> None:
    """pageserve - cached static page server."""


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help=CONFIG_OPTION_HELP,
)
@click.option(
    "--root",
    "-r",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Content root directory (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (log cache hits and misses)",
)
def serve(
    config_path: Path | None,
    root: Path | None,
    host: str | None,
    port: int | None,
    verbose: bool,
) -> None:
    """Start the page server."""
    from pageserve.server import create_app, run_app

    _configure_logging(verbose)
    config = _load_config(config_path).with_overrides(host=host, port=port, root=root)

    click.echo(f"Content root: {config.pages.root}")
    click.echo(f"Categories: {', '.join(config.pages.index) or '(none)'}")

    try:
        app = create_app(config)
    except (SeedError, ValueError, FileNotFoundError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    run_app(app, config)


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help=CONFIG_OPTION_HELP,
)
def check(config_path: Path | None) -> None:
    """Load every configured index page without serving."""
    from pageserve.server import build_cache

    config = _load_config(config_path)

    try:
        cache = build_cache(config)
    except (SeedError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    for key in cache.keys():
        click.echo(f"  {key}: {config.pages.index[key]}")
    click.echo(click.style(f"\n{len(cache)} categories OK", fg="green"))


def _load_config(config_path: Path | None) -> Config:
    """Load configuration, exiting on errors.

    Args:
        config_path: Explicit config path or None for auto-discovery

    Returns:
        Loaded configuration

    Raises:
        SystemExit: If the configuration cannot be read or is invalid
    """
    try:
        return Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Error: invalid configuration: {e}", fg="red"), err=True)
        sys.exit(1)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    cli()
