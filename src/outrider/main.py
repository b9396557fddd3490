"""CLI entry point for Outrider.

This module defines the Click-based command-line interface for Outrider.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

# Load OUTRIDER_* settings from a .env file before configuration is read
load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

from outrider import __version__  # noqa: E402
from outrider.cli.commands.condition import condition  # noqa: E402
from outrider.cli.context import CLIContext  # noqa: E402
from outrider.cli.output import print_error  # noqa: E402
from outrider.config import load_config  # noqa: E402
from outrider.exceptions import ConfigError  # noqa: E402
from outrider.logging import configure_logging, level_from_verbosity  # noqa: E402


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="outrider")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=False, path_type=str),
    default=None,
    help="Path to config file (overrides ./outrider.yaml).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress non-essential output (ERROR level only).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    verbose: int,
    quiet: bool,
) -> None:
    """Outrider - compile markdown workflow descriptions into platform workflows."""
    ctx.ensure_object(dict)

    config_path = Path(config_file) if config_file else None
    try:
        config = load_config(config_path)
    except ConfigError as e:
        # Reported before logging is configured
        print_error(e)
        ctx.exit(1)

    ctx.obj["cli_ctx"] = CLIContext(
        config=config,
        config_path=config_path,
        verbosity=verbose,
        quiet=quiet,
    )

    configure_logging(
        level=level_from_verbosity(config.verbosity, verbose=verbose, quiet=quiet)
    )

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(condition)

if __name__ == "__main__":
    cli()
