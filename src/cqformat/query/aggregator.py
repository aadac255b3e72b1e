# topmark:header:start
#
#   project      : CQFormat
#   file         : aggregator.py
#   file_relpath : src/cqformat/query/aggregator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Thread-safe accumulation of target records into a `ResultSet`.

Lifecycle: ``start()`` once, ``append(batch)`` from any number of producer
threads, ``finalize()`` once. The aggregator owns the backing list until
`finalize` hands out an immutable `ResultSet`; no reference to the list ever
leaves this module.

Ordering:
    - Records of one batch stay contiguous and in batch order.
    - The order of batches reflects lock acquisition order; callers must not
      depend on it.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from cqformat.config.logging import get_logger
from cqformat.core.errors import AggregationClosedError, AggregationStateError
from cqformat.query.types import ResultSet

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cqformat.config.logging import CQFormatLogger
    from cqformat.query.types import TargetRecord

logger: CQFormatLogger = get_logger(__name__)


class ResultAggregator:
    """Append-only, mutex-guarded store of target records."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: list[TargetRecord] | None = None
        self._finalized: bool = False

    def start(self) -> None:
        """Create the empty store.

        Raises:
            AggregationStateError: If the aggregator was already started.
        """
        with self._lock:
            if self._records is not None or self._finalized:
                raise AggregationStateError("ResultAggregator.start() called more than once")
            self._records = []
        logger.debug("aggregation started")

    def append(self, batch: Iterable[TargetRecord]) -> None:
        """Append one batch of records, keeping their relative order.

        Safe to call concurrently from several threads.

        Raises:
            AggregationStateError: If `start` was not called.
            AggregationClosedError: If the aggregator was finalized.
        """
        # Materialize outside the lock to keep the critical section short.
        records: list[TargetRecord] = list(batch)
        with self._lock:
            if self._finalized:
                raise AggregationClosedError("cannot append to a finalized result set")
            if self._records is None:
                raise AggregationStateError("ResultAggregator.append() called before start()")
            self._records.extend(records)
        logger.trace("appended batch of %d records", len(records))

    def finalize(self) -> ResultSet:
        """Close the store and return the immutable result set.

        Raises:
            AggregationStateError: If `start` was not called.
            AggregationClosedError: If called a second time.
        """
        with self._lock:
            if self._finalized:
                raise AggregationClosedError("result set was already finalized")
            if self._records is None:
                raise AggregationStateError("ResultAggregator.finalize() called before start()")
            self._finalized = True
            result = ResultSet(records=tuple(self._records))
        logger.debug("aggregation finalized with %d records", len(result))
        return result

    @property
    def is_finalized(self) -> bool:
        """Return True once `finalize` has succeeded."""
        with self._lock:
            return self._finalized

    def __len__(self) -> int:
        with self._lock:
            return len(self._records) if self._records is not None else 0
