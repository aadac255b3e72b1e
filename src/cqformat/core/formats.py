# topmark:header:start
#
#   project      : CQFormat
#   file         : formats.py
#   file_relpath : src/cqformat/core/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared output format definitions used across CQFormat frontends.

This module centralizes the `OutputFormat` enum so the CLI, the encoder and the
config layer agree on the same format vocabulary without introducing `Click`
dependencies.
"""

from __future__ import annotations

from enum import Enum
from typing import Final

from cqformat.core.errors import UnknownFormatError


class OutputFormat(str, Enum):
    """Wire format of the encoded query result.

    Attributes:
        BINARY: Compact MessagePack encoding, written verbatim to a byte sink.
        STRUCTURED_TEXT: Human-readable TOML rendering of the same schema.
        JSON: Pretty-printed JSON followed by exactly one newline.
    """

    BINARY = "binary"
    STRUCTURED_TEXT = "structured-text"
    JSON = "json"

    @property
    def is_binary(self) -> bool:
        """Return True when the format produces bytes rather than text."""
        return self is OutputFormat.BINARY


# Format names used by the proto-based formatter this tool replaces.
FORMAT_ALIASES: Final[dict[str, OutputFormat]] = {
    "proto": OutputFormat.BINARY,
    "textproto": OutputFormat.STRUCTURED_TEXT,
    "jsonproto": OutputFormat.JSON,
}


def parse_output_format(value: str | OutputFormat) -> OutputFormat:
    """Return the `OutputFormat` named by ``value``.

    Matching is case-insensitive on the enum values and on `FORMAT_ALIASES`.

    Args:
        value: A format name or an `OutputFormat` member.

    Returns:
        The matching `OutputFormat`.

    Raises:
        UnknownFormatError: If ``value`` names no supported format.
    """
    if isinstance(value, OutputFormat):
        return value
    if isinstance(value, str):
        key: str = value.strip().lower()
        for fmt in OutputFormat:
            if fmt.value == key:
                return fmt
        if key in FORMAT_ALIASES:
            return FORMAT_ALIASES[key]
    raise UnknownFormatError(value, [fmt.value for fmt in OutputFormat])
