# topmark:header:start
#
#   project      : CQFormat
#   file         : serializers.py
#   file_relpath : src/cqformat/query/machine/serializers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Serialization helpers for encoded query results.

This module turns *shaped* result documents into bytes or text and back.

Responsibilities:
  - Dispatch on `OutputFormat` to the codecs in `cqformat.core.machine.serializers`.
  - Apply the per-format framing: JSON output ends with exactly one newline,
    structured text ends with whatever the TOML grammar emits, binary output
    gets no framing at all.

This module is I/O-free: it returns values for the caller to write.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cqformat.core.formats import OutputFormat, parse_output_format
from cqformat.core.machine.serializers import (
    deserialize_json_object,
    deserialize_msgpack_object,
    deserialize_toml_object,
    serialize_json_object,
    serialize_msgpack_object,
    serialize_toml_object,
)

if TYPE_CHECKING:
    from collections.abc import Mapping


def serialize_result_shape(shape: Mapping[str, object], fmt: OutputFormat | str) -> bytes | str:
    """Serialize a result document in the requested wire format.

    Args:
        shape: A document built by `cqformat.query.machine.shapes`.
        fmt: Target format (an `OutputFormat` or its name).

    Returns:
        ``bytes`` for `OutputFormat.BINARY`, ``str`` otherwise.

    Raises:
        UnknownFormatError: If ``fmt`` names no supported format.
    """
    output_format: OutputFormat = parse_output_format(fmt)
    if output_format is OutputFormat.BINARY:
        return serialize_msgpack_object(dict(shape))
    if output_format is OutputFormat.STRUCTURED_TEXT:
        return serialize_toml_object(dict(shape))
    return serialize_json_object(dict(shape)) + "\n"


def decode_binary(data: bytes) -> object:
    """Decode binary (MessagePack) query output."""
    return deserialize_msgpack_object(data)


def decode_structured_text(text: str) -> object:
    """Decode structured-text (TOML) query output."""
    return deserialize_toml_object(text)


def decode_json(text: str | bytes) -> object:
    """Decode JSON query output."""
    return deserialize_json_object(text)


def decode_result(data: bytes | str, fmt: OutputFormat | str) -> object:
    """Decode query output of any format into plain Python structures.

    Args:
        data: Encoded output. Text formats accept UTF-8 bytes as well.
        fmt: Format of ``data``.

    Returns:
        The decoded document (dicts, lists and scalars).

    Raises:
        UnknownFormatError: If ``fmt`` names no supported format.
        TypeError: If binary output is given as text.
    """
    output_format: OutputFormat = parse_output_format(fmt)
    if output_format is OutputFormat.BINARY:
        if isinstance(data, str):
            raise TypeError("binary output must be decoded from bytes")
        return decode_binary(data)
    text: str = data.decode("utf-8") if isinstance(data, bytes) else data
    if output_format is OutputFormat.STRUCTURED_TEXT:
        return decode_structured_text(text)
    return decode_json(text)
