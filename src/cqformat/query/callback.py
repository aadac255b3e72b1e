# topmark:header:start
#
#   project      : CQFormat
#   file         : callback.py
#   file_relpath : src/cqformat/query/callback.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Thread-safe query output callback and a concurrent driver for it.

`QueryOutputCallback` glues the pipeline together:

    start() -> process_output(batch)* (any thread) -> close(fail_fast)

`close(fail_fast=False)` finalizes the aggregator, encodes and writes the result
exactly once. `close(fail_fast=True)` tears the run down without encoding or
writing anything.

`run_concurrently` feeds batches to the callback from a thread pool and closes it
in fail-fast mode when any producer raises.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from cqformat.config.logging import get_logger
from cqformat.core.formats import OutputFormat, parse_output_format
from cqformat.query.aggregator import ResultAggregator
from cqformat.query.encoder import encode, write_output
from cqformat.query.records import TargetRecordBuilder

if TYPE_CHECKING:
    from collections.abc import Iterable
    from concurrent.futures import Future

    from cqformat.config.logging import CQFormatLogger
    from cqformat.query.encoder import EncodedOutput
    from cqformat.query.sinks import OutputSink, WriteResult
    from cqformat.query.types import ConfiguredTarget, ResultSet, TargetRecord

logger: CQFormatLogger = get_logger(__name__)


class QueryOutputCallback:
    """Collect configured targets from concurrent producers and write them once.

    Args:
        sink: Destination of the encoded output.
        output_format: Output format; validated here, before any processing.
        include_configuration: Emit configuration checksums (full shape).
        builder: Record builder; defaults to a `TargetRecordBuilder` with all
            attributes and the default resolver.
        sort_by_label: Sort the final records by target label and configuration
            token before encoding.

    Raises:
        UnknownFormatError: If ``output_format`` is not supported.
    """

    def __init__(
        self,
        sink: OutputSink,
        output_format: OutputFormat | str,
        *,
        include_configuration: bool = True,
        builder: TargetRecordBuilder | None = None,
        sort_by_label: bool = False,
    ) -> None:
        self._sink: OutputSink = sink
        self._format: OutputFormat = parse_output_format(output_format)
        self._include_configuration: bool = include_configuration
        self._builder: TargetRecordBuilder = builder or TargetRecordBuilder()
        self._sort_by_label: bool = sort_by_label
        self._aggregator = ResultAggregator()
        self._write_result: WriteResult | None = None

    @property
    def name(self) -> str:
        """Return the name of the output format."""
        return self._format.value

    @property
    def write_result(self) -> WriteResult | None:
        """Return the result of the final write, or None if nothing was written."""
        return self._write_result

    def start(self) -> None:
        """Open the result set."""
        self._aggregator.start()

    def process_output(self, partial_result: Iterable[ConfiguredTarget]) -> None:
        """Convert one batch into records and append it.

        Safe to call from several threads at once.

        Raises:
            ConfigurationAmbiguityError: If an attribute matches ambiguously.
            AggregationStateError: If called before `start` or after `close`.
        """
        records: list[TargetRecord] = self._builder.build_batch(
            partial_result, include_configuration=self._include_configuration
        )
        self._aggregator.append(records)

    def close(self, fail_fast: bool) -> None:
        """Finish the run.

        Args:
            fail_fast: True when the run failed upstream; nothing is encoded or
                written and the result set is discarded.

        Raises:
            AttributeValueError: If an attribute value does not fit its type.
            OSError: If writing to the sink fails.
        """
        if fail_fast:
            if not self._aggregator.is_finalized:
                discarded: int = len(self._aggregator)
                logger.info("run aborted, discarding %d records", discarded)
            return

        result_set: ResultSet = self._aggregator.finalize()
        if self._sort_by_label:
            result_set = result_set.sorted_by_label()
        encoded: EncodedOutput = encode(result_set, self._include_configuration, self._format)
        self._write_result = write_output(encoded, self._sink)


def run_concurrently(
    callback: QueryOutputCallback,
    batches: Iterable[Iterable[ConfiguredTarget]],
    *,
    jobs: int = 1,
) -> None:
    """Drive ``callback`` with ``batches`` from a pool of ``jobs`` threads.

    Args:
        callback: A callback that has not been started yet.
        batches: Batches of configured targets.
        jobs: Number of producer threads (at least 1).

    Raises:
        ValueError: If ``jobs`` is smaller than 1.
        Exception: The first producer exception, after closing ``callback``
            with ``fail_fast=True``.
    """
    if jobs < 1:
        raise ValueError(f"jobs must be at least 1, got {jobs}")

    callback.start()
    try:
        with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="cqformat") as pool:
            futures: list[Future[None]] = [
                pool.submit(callback.process_output, batch) for batch in batches
            ]
            for future in futures:
                future.result()
    except BaseException:
        logger.debug("producer failed, closing %s output in fail-fast mode", callback.name)
        callback.close(fail_fast=True)
        raise
    callback.close(fail_fast=False)
