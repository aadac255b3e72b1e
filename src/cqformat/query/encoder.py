# topmark:header:start
#
#   project      : CQFormat
#   file         : encoder.py
#   file_relpath : src/cqformat/query/encoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Encode a finalized `ResultSet` into exactly one wire format.

Encoding happens fully in memory: `encode` either returns the complete
`EncodedOutput` or raises, and only `write_output` touches a sink. A failed
encode therefore never leaves partial output behind.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cqformat.config.logging import get_logger
from cqformat.core.formats import OutputFormat, parse_output_format
from cqformat.query.machine.serializers import serialize_result_shape
from cqformat.query.machine.shapes import build_result_shape

if TYPE_CHECKING:
    from cqformat.config.logging import CQFormatLogger
    from cqformat.query.sinks import OutputSink, WriteResult
    from cqformat.query.types import ResultSet

logger: CQFormatLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class EncodedOutput:
    """The terminal artifact of a run.

    Attributes:
        output_format: Format the data is encoded in.
        data: ``bytes`` for binary output, ``str`` for the text formats.
    """

    output_format: OutputFormat
    data: bytes | str

    @property
    def is_binary(self) -> bool:
        """Return True when ``data`` is raw bytes."""
        return isinstance(self.data, bytes)

    def to_bytes(self) -> bytes:
        """Return the payload as bytes (text formats are UTF-8 encoded)."""
        if isinstance(self.data, bytes):
            return self.data
        return self.data.encode("utf-8")


def encode(
    result_set: ResultSet,
    include_configuration: bool,
    output_format: OutputFormat | str,
) -> EncodedOutput:
    """Encode ``result_set`` in the requested format.

    Args:
        result_set: Finalized records; never modified.
        include_configuration: Emit the full configured-result shape (True) or
            the narrowed query-result shape without configuration tokens (False).
        output_format: ``binary``, ``structured-text`` or ``json``.

    Returns:
        The encoded output.

    Raises:
        UnknownFormatError: If ``output_format`` is not supported. Checked
            before any record is looked at.
        AttributeValueError: If an attribute value does not fit its type.
    """
    fmt: OutputFormat = parse_output_format(output_format)
    shape: dict[str, object] = build_result_shape(
        result_set, include_configuration=include_configuration
    )
    data: bytes | str = serialize_result_shape(shape, fmt)
    logger.debug(
        "encoded %d records as %s (include_configuration=%s)",
        len(result_set),
        fmt.value,
        include_configuration,
    )
    return EncodedOutput(output_format=fmt, data=data)


def write_output(encoded: EncodedOutput, sink: OutputSink) -> WriteResult:
    """Write ``encoded`` to ``sink`` in one call, then flush."""
    result: WriteResult = sink.write(encoded)
    logger.debug("wrote %d bytes to %s", result.bytes_written, result.destination)
    return result
