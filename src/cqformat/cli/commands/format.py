# topmark:header:start
#
#   project      : CQFormat
#   file         : format.py
#   file_relpath : src/cqformat/cli/commands/format.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CQFormat `format` command.

Reads configured query results (JSON or NDJSON batches), resolves every rule
attribute for its target's configuration and writes the encoded result set
once, to stdout or atomically to ``--output``.

Exit codes follow `cqformat.cli.exit_codes.ExitCode`: input problems map to
``DATA_ERROR``, configuration problems to ``CONFIG_ERROR``, I/O failures to
``IO_ERROR``. Nothing is written when processing fails.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from cqformat.cli.config_resolver import resolve_config_from_click
from cqformat.cli.errors import from_pipeline_error
from cqformat.cli.options import (
    common_config_options,
    output_format_option,
    record_content_options,
)
from cqformat.config.io import to_toml
from cqformat.config.logging import get_logger
from cqformat.core.errors import CQFormatError
from cqformat.query.callback import QueryOutputCallback, run_concurrently
from cqformat.query.input import load_batches
from cqformat.query.records import AttributeFilter, TargetRecordBuilder
from cqformat.query.sinks import FileSystemSink, StreamSink

if TYPE_CHECKING:
    from cqformat.config.logging import CQFormatLogger
    from cqformat.config.model import Config
    from cqformat.core.formats import OutputFormat
    from cqformat.query.input import Batch
    from cqformat.query.sinks import OutputSink, WriteResult

logger: CQFormatLogger = get_logger(__name__)


def _build_callback(config: Config, sink: OutputSink) -> QueryOutputCallback:
    builder = TargetRecordBuilder(
        attribute_filter=AttributeFilter(
            include_default_values=config.include_default_values,
            rule_attributes=config.rule_attributes,
        )
    )
    return QueryOutputCallback(
        sink,
        config.output_format,
        include_configuration=config.include_configurations,
        builder=builder,
        sort_by_label=config.sort_by_label,
    )


@click.command(
    name="format",
    help="Encode configured query results. INPUT is a JSON/NDJSON file or '-' for stdin.",
)
@click.argument("input_path", metavar="INPUT", required=False, default="-")
@output_format_option
@record_content_options
@click.option(
    "--jobs",
    "-j",
    "jobs",
    type=click.IntRange(min=1),
    default=None,
    help="Number of threads converting batches into records.",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write to FILE (atomically replaced) instead of stdout.",
)
@common_config_options
def format_command(
    *,
    input_path: str,
    output_format: OutputFormat | None,
    include_configurations: bool | None,
    include_default_values: bool | None,
    rule_attributes: tuple[str, ...],
    sort_by_label: bool | None,
    jobs: int | None,
    output_path: str | None,
    no_config: bool,
    config_paths: tuple[str, ...],
) -> None:
    """Encode configured query results.

    Args:
        input_path (str): Input document path, or ``-`` for stdin.
        output_format (OutputFormat | None): Wire format override.
        include_configurations (bool | None): Emit configuration checksums.
        include_default_values (bool | None): Emit implicit attribute values.
        rule_attributes (tuple[str, ...]): Attribute names to keep.
        sort_by_label (bool | None): Order records by label.
        jobs (int | None): Producer thread count.
        output_path (str | None): Destination file; stdout if None.
        no_config (bool): Skip config discovery.
        config_paths (tuple[str, ...]): Extra config files merged in order.
    """
    config: Config = resolve_config_from_click(
        input_path=input_path,
        output_format=output_format,
        include_configurations=include_configurations,
        include_default_values=include_default_values,
        rule_attributes=list(rule_attributes),
        sort_by_label=sort_by_label,
        jobs=jobs,
        no_config=no_config,
        config_paths=list(config_paths),
    )
    logger.debug("Effective configuration:\n%s", to_toml(config.to_toml_dict()))

    sink: OutputSink = (
        FileSystemSink(output_path) if output_path else StreamSink(sys.stdout, "<stdout>")
    )

    try:
        if input_path == "-":
            batches: list[Batch] = load_batches(click.get_text_stream("stdin"))
        else:
            batches = load_batches(input_path)

        callback: QueryOutputCallback = _build_callback(config, sink)
        run_concurrently(callback, batches, jobs=config.jobs)
    except (CQFormatError, OSError, UnicodeDecodeError) as exc:
        raise from_pipeline_error(exc) from exc

    result: WriteResult | None = callback.write_result
    if result is not None:
        logger.info("wrote %d bytes to %s", result.bytes_written, result.destination)
