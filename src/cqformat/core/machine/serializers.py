# topmark:header:start
#
#   project      : CQFormat
#   file         : serializers.py
#   file_relpath : src/cqformat/core/machine/serializers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pure serialization utilities for machine output.

This module converts *already-shaped* machine output objects into bytes or
strings, and decodes them back into plain Python structures.

It is intentionally:
- Click-free
- side-effect-free (serialization only, no writing)

Codecs:
- MessagePack (`msgpack`): compact binary, ``bin`` type enabled.
- TOML (`tomlkit`): human-readable structured text.
- JSON (stdlib `json`): pretty-printed with a two-space indent.
"""

from __future__ import annotations

import json
from typing import Any, cast

import msgpack
import tomlkit

from cqformat.core.machine.schemas import normalize_payload


def serialize_json_object(obj: object) -> str:
    """Serialize an object to pretty-printed JSON (no trailing newline).

    Args:
        obj: The object to serialize.

    Returns:
        A pretty-printed JSON string (no trailing newline).
    """
    normalized: object = normalize_payload(obj)
    # json.dumps() doesn't append a trailing newline
    return json.dumps(normalized, indent=2, ensure_ascii=False)


def serialize_msgpack_object(obj: object) -> bytes:
    """Serialize an object to MessagePack bytes.

    Args:
        obj: The object to serialize.

    Returns:
        The packed bytes.
    """
    normalized: object = normalize_payload(obj)
    return cast("bytes", msgpack.packb(normalized, use_bin_type=True))


def serialize_toml_object(obj: object) -> str:
    """Serialize a mapping to a TOML document.

    Lists of mappings become arrays of tables, nested mappings become tables.
    Callers must place nested tables after scalar keys within each mapping.

    Args:
        obj: The mapping to serialize.

    Returns:
        The TOML document text.

    Raises:
        TypeError: If ``obj`` does not normalize to a mapping (TOML documents are tables).
    """
    normalized: object = normalize_payload(obj)
    if not isinstance(normalized, dict):
        raise TypeError(f"TOML documents must be tables, got {type(normalized).__name__}")
    return tomlkit.dumps(cast("dict[str, Any]", normalized))


def deserialize_json_object(text: str | bytes) -> object:
    """Decode a JSON document into plain Python structures."""
    return json.loads(text)


def deserialize_msgpack_object(data: bytes) -> object:
    """Decode MessagePack bytes into plain Python structures (lists, str keys)."""
    return msgpack.unpackb(data, raw=False)


def deserialize_toml_object(text: str) -> object:
    """Decode a TOML document into plain Python structures."""
    return tomlkit.parse(text).unwrap()
