# topmark:header:start
#
#   project      : CQFormat
#   file         : main.py
#   file_relpath : src/cqformat/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click entry point of the CQFormat CLI.

Group-level options (verbosity) are initialized once and placed into
``ctx.obj``; subcommands read them from there.
"""

from __future__ import annotations

import click

from cqformat.cli.commands.decode import decode_command
from cqformat.cli.commands.format import format_command
from cqformat.cli.commands.version import version_command
from cqformat.cli.options import common_verbose_options, resolve_verbosity
from cqformat.config.logging import get_logger, resolve_env_log_level, setup_logging
from cqformat.core.keys import ArgKey

logger = get_logger(__name__)


def init_common_state(ctx: click.Context, *, verbose: int, quiet: int) -> None:
    """Initialize shared verbosity state on the Click context.

    ``CQFORMAT_LOG_LEVEL`` wins over ``-v``/``-q`` when set.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
    """
    ctx.obj = ctx.obj or {}

    level_cli: int = resolve_verbosity(verbose, quiet)
    ctx.obj[ArgKey.VERBOSITY_LEVEL] = level_cli

    level_env: int | None = resolve_env_log_level()
    level: int = level_env if level_env is not None else level_cli
    ctx.obj[ArgKey.LOG_LEVEL] = level
    setup_logging(level=level)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="CQFormat: encode configured query results as binary, structured text or JSON.",
)
@common_verbose_options
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: int) -> None:
    """Entry point for the CQFormat CLI."""
    init_common_state(ctx, verbose=verbose, quiet=quiet)

    if ctx.invoked_subcommand is None:
        click.echo("Hint: use 'cqformat format INPUT' to encode a query result.")
        click.echo()
        click.echo(ctx.get_help())


cli.add_command(version_command)

cli.add_command(format_command)

cli.add_command(decode_command)

if __name__ == "__main__":
    cli()
