# topmark:header:start
#
#   project      : CQFormat
#   file         : decode.py
#   file_relpath : src/cqformat/cli/commands/decode.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CQFormat `decode` command.

Decodes encoded query output of any format and prints it as JSON, which makes
binary output inspectable.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from cqformat.cli.cli_types import EnumChoiceParam
from cqformat.cli.errors import CQFormatDataError, from_pipeline_error
from cqformat.config.logging import get_logger
from cqformat.core.errors import CQFormatError
from cqformat.core.formats import FORMAT_ALIASES, OutputFormat
from cqformat.core.machine.serializers import serialize_json_object
from cqformat.query.machine import decode_result

if TYPE_CHECKING:
    from cqformat.config.logging import CQFormatLogger

logger: CQFormatLogger = get_logger(__name__)


def sniff_output_format(data: bytes) -> OutputFormat:
    """Guess the format of encoded query output.

    Bytes that are not UTF-8 are binary. Text starting with ``{`` is JSON;
    anything else is structured text.
    """
    try:
        text: str = data.decode("utf-8")
    except UnicodeDecodeError:
        return OutputFormat.BINARY
    if text.lstrip().startswith("{"):
        return OutputFormat.JSON
    return OutputFormat.STRUCTURED_TEXT


@click.command(
    name="decode",
    help="Decode encoded query output and print it as JSON. INPUT defaults to stdin.",
)
@click.argument("input_path", metavar="INPUT", required=False, default="-")
@click.option(
    "--input-format",
    "input_format",
    type=EnumChoiceParam(OutputFormat, aliases=FORMAT_ALIASES),
    default=None,
    help="Format of INPUT; guessed from its content when omitted.",
)
def decode_command(*, input_path: str, input_format: OutputFormat | None) -> None:
    """Decode encoded query output.

    Args:
        input_path (str): Encoded file, or ``-`` for stdin.
        input_format (OutputFormat | None): Format of the input, or None to guess.
    """
    try:
        if input_path == "-":
            data: bytes = click.get_binary_stream("stdin").read()
        else:
            data = Path(input_path).read_bytes()
    except OSError as exc:
        raise from_pipeline_error(exc) from exc

    fmt: OutputFormat = input_format or sniff_output_format(data)
    logger.debug("decoding %d bytes as %s", len(data), fmt.value)

    try:
        document: object = decode_result(data, fmt)
    except (CQFormatError, UnicodeDecodeError) as exc:
        raise from_pipeline_error(exc) from exc
    except ValueError as exc:
        # msgpack, tomlkit and json parse errors all derive from ValueError
        raise CQFormatDataError(f"cannot decode input as {fmt.value}: {exc}") from exc

    click.echo(serialize_json_object(document))
