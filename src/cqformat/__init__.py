# topmark:header:start
#
#   project      : CQFormat
#   file         : __init__.py
#   file_relpath : src/cqformat/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CQFormat package.

CQFormat turns the results of a configured build-graph query into a
schema-defined result set and encodes it as compact binary (MessagePack),
structured text (TOML) or JSON. It exposes both a CLI and a small typed API
for automation.
"""

from __future__ import annotations
