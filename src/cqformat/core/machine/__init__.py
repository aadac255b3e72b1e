# topmark:header:start
#
#   project      : CQFormat
#   file         : __init__.py
#   file_relpath : src/cqformat/core/machine/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Core machine-output infrastructure.

This package implements the three wire codecs shared by every CQFormat output.

Separation of concerns (naming + placement):

1) Schema primitives (normalization)
   - `cqformat.core.machine.schemas`
   - `normalize_payload(...)` turns payload objects into plain dict/list/scalars.

2) Payload builders (domain data only)
   - `cqformat.<domain>.machine.payloads`
   - Naming: `build_*_payload(...)`, `iter_*_payloads(...)`

3) Shape builders (top-level documents; still not serialized)
   - `cqformat.<domain>.machine.shapes`
   - Naming: `build_*_shape(...)`

4) Serialization (turn shapes into bytes/strings; no printing)
   - `cqformat.core.machine.serializers`
   - Naming: `serialize_*` returns `bytes` or `str`, `deserialize_*` is the inverse.
   - Notes:
     - `json.dumps()` does not add a trailing newline.
     - `tomlkit.dumps()` ends with the newline the TOML grammar requires.

Rule of thumb:
- If it imports `click`, it does not live in `core.machine`.
"""

from __future__ import annotations

from cqformat.core.machine.schemas import normalize_payload
from cqformat.core.machine.serializers import (
    deserialize_json_object,
    deserialize_msgpack_object,
    deserialize_toml_object,
    serialize_json_object,
    serialize_msgpack_object,
    serialize_toml_object,
)

__all__ = [
    "deserialize_json_object",
    "deserialize_msgpack_object",
    "deserialize_toml_object",
    "normalize_payload",
    "serialize_json_object",
    "serialize_msgpack_object",
    "serialize_toml_object",
]
