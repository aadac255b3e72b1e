# topmark:header:start
#
#   project      : CQFormat
#   file         : shapes.py
#   file_relpath : src/cqformat/query/machine/shapes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shape builders for encoded query results.

Two top-level shapes exist:

- Configured result (configuration detail requested):
  ``{"results": [{"target": <target>, "configuration": {"checksum": <token>}}, ...]}``
- Query result (narrowed):
  ``{"target": [<target>, ...]}``

The narrowing transform builds a fresh, flatter document without configuration
tokens. It only reads the `ResultSet`, which stays unchanged.

This module is pure (no I/O) and delegates payload construction to
`cqformat.query.machine.payloads`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cqformat.query.machine.payloads import (
    build_configured_target_payload,
    build_target_payload,
)
from cqformat.query.machine.schemas import ResultKey

if TYPE_CHECKING:
    from cqformat.query.types import ResultSet


def build_configured_result_shape(result_set: ResultSet) -> dict[str, object]:
    """Build the full configured-result document.

    Shape:
        {"results": [{"target": {...}, "configuration": {"checksum": "..."}}, ...]}

    Records without a configuration token carry no ``configuration`` table.
    """
    return {
        ResultKey.RESULTS: [
            build_configured_target_payload(record).to_dict() for record in result_set
        ],
    }


def build_query_result_shape(result_set: ResultSet) -> dict[str, object]:
    """Build the narrowed query-result document.

    Shape:
        {"target": [{...}, ...]}

    Configuration tokens are dropped; target descriptors and attributes are
    identical to the configured shape.
    """
    return {
        ResultKey.TARGET: [build_target_payload(record).to_dict() for record in result_set],
    }


def build_result_shape(result_set: ResultSet, *, include_configuration: bool) -> dict[str, object]:
    """Select the full or the narrowed shape."""
    if include_configuration:
        return build_configured_result_shape(result_set)
    return build_query_result_shape(result_set)
