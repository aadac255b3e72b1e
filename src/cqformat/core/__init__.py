# topmark:header:start
#
#   project      : CQFormat
#   file         : __init__.py
#   file_relpath : src/cqformat/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, UI-agnostic primitives shared across CQFormat.

The ``cqformat.core`` package provides small, reusable building blocks that are
safe to import from anywhere in the codebase (CLI, config, query pipeline, tests)
without pulling in Click or console concerns.

Included modules:

- ``errors``
  The exception taxonomy raised by resolution, aggregation, encoding and input
  parsing.

- ``formats``
  The `OutputFormat` vocabulary and the strict format-name parser.

- ``diagnostics``
  Diagnostic levels, messages and the mutable `DiagnosticLog` used while
  loading configuration.

- ``machine``
  Payload normalization and the three wire codecs (MessagePack, TOML, JSON).
"""

from __future__ import annotations
