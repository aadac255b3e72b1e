# topmark:header:start
#
#   project      : CQFormat
#   file         : __init__.py
#   file_relpath : src/cqformat/query/machine/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Encoded query result layer: schemas, payloads, shapes and serializers."""

from __future__ import annotations

from cqformat.query.machine.serializers import (
    decode_binary,
    decode_json,
    decode_result,
    decode_structured_text,
    serialize_result_shape,
)
from cqformat.query.machine.shapes import (
    build_configured_result_shape,
    build_query_result_shape,
    build_result_shape,
)

__all__ = [
    "build_configured_result_shape",
    "build_query_result_shape",
    "build_result_shape",
    "decode_binary",
    "decode_json",
    "decode_result",
    "decode_structured_text",
    "serialize_result_shape",
]
