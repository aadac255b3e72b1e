# topmark:header:start
#
#   project      : CQFormat
#   file         : version.py
#   file_relpath : src/cqformat/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CQFormat `version` command.

Prints the CQFormat version as installed in the active Python environment.
"""

from __future__ import annotations

import click

from cqformat.constants import CQFORMAT_VERSION
from cqformat.core.machine.serializers import serialize_json_object


@click.command(
    name="version",
    help="Show the current version of CQFormat.",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the version as a JSON object.",
)
def version_command(*, as_json: bool = False) -> None:
    """Show the current version of CQFormat.

    Args:
        as_json (bool): Print ``{"version": ...}`` instead of the bare version.
    """
    if as_json:
        click.echo(serialize_json_object({"version": CQFORMAT_VERSION}))
    else:
        click.echo(CQFORMAT_VERSION)
