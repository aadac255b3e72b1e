# topmark:header:start
#
#   project      : CQFormat
#   file         : __init__.py
#   file_relpath : src/cqformat/query/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configured query result pipeline.

Producers hand batches of `ConfiguredTarget` to a `QueryOutputCallback`, which
builds one `TargetRecord` per target (`TargetRecordBuilder`), accumulates them
(`ResultAggregator`) and encodes the finalized `ResultSet` once (`encode`).
"""

from __future__ import annotations

from cqformat.query.aggregator import ResultAggregator
from cqformat.query.callback import QueryOutputCallback, run_concurrently
from cqformat.query.encoder import EncodedOutput, encode, write_output
from cqformat.query.records import AttributeFilter, TargetRecordBuilder
from cqformat.query.resolver import resolve_attribute, resolve_view

__all__ = [
    "AttributeFilter",
    "EncodedOutput",
    "QueryOutputCallback",
    "ResultAggregator",
    "TargetRecordBuilder",
    "encode",
    "resolve_attribute",
    "resolve_view",
    "run_concurrently",
    "write_output",
]
