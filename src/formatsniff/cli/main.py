# topmark:header:start
#
#   project      : FormatSniff
#   file         : main.py
#   file_relpath : src/formatsniff/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FormatSniff command-line interface.

Group-level options (verbosity, color, configuration) are resolved once in
`init_common_state` and placed into ``ctx.obj`` for the subcommands:

- ``console``: the `ClickConsole` for program output;
- ``verbosity_level``: count of ``-v`` flags, gating extra output details;
- ``log_level``: the effective logging level;
- ``config``: the frozen `Config`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click

from formatsniff.cli.commands.formats import formats_command
from formatsniff.cli.commands.sniff import sniff_command
from formatsniff.cli.commands.version import version_command
from formatsniff.cli.console import ClickConsole
from formatsniff.cli.errors import FormatSniffConfigError
from formatsniff.cli.options import common_verbose_options, resolve_verbosity
from formatsniff.config.io import ConfigError
from formatsniff.config.logging import get_logger, resolve_env_log_level, setup_logging
from formatsniff.config.model import load_config

if TYPE_CHECKING:
    from formatsniff.config.model import Config

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    no_color: bool,
    config_path: Path | None,
) -> None:
    """Initialize shared state (console, logging, configuration) on the Click context.

    The logging level is taken from ``FORMATSNIFF_LOG_LEVEL`` if set, then
    from ``-v``/``-q``, then from the ``log_level`` config key, and defaults
    to WARNING.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed.
        config_path (Path | None): Explicit configuration file.

    Raises:
        FormatSniffUsageError: If both ``-v`` and ``-q`` are given.
        FormatSniffConfigError: If the configuration is invalid.
    """
    ctx.obj = ctx.obj or {}

    console: ClickConsole = ClickConsole(enable_color=not no_color)
    ctx.obj["console"] = console
    ctx.color = not no_color

    level_cli: int = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity_level"] = verbose

    level_env: int | None = resolve_env_log_level()
    level: int = level_env if level_env is not None else level_cli
    setup_logging(level=level)

    try:
        config: Config = load_config(config_path)
    except ConfigError as exc:
        raise FormatSniffConfigError(str(exc)) from exc
    ctx.obj["config"] = config

    if level_env is None and not (verbose or quiet) and config.log_level is not None:
        level = config.log_level
        setup_logging(level=level)
    ctx.obj["log_level"] = level
    logger.debug("Effective log level: %s", logging.getLevelName(level))


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Resolve the format of publication files, archives and media.",
)
@common_verbose_options
@click.option("--no-color", is_flag=True, default=False, help="Disable colored output.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read configuration from this TOML file (after discovered ones).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    no_color: bool,
    config_path: Path | None,
) -> None:
    """Entry point for the FormatSniff CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        no_color=no_color,
        config_path=config_path,
    )
    console: ClickConsole = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'formatsniff sniff [PATHS...]' to resolve formats.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(sniff_command)

cli.add_command(formats_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
