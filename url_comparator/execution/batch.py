"""
Batch Orchestrator

Splits the pairs into consecutive chunks of at most ``batch_size`` and runs
them strictly one after another. Inside a chunk every pair is dispatched at
once and the chunk is joined before the next one starts, so no more than
``batch_size`` comparisons are ever in flight.

Counters and report lines are only touched on the orchestrator's own thread
while it drains completed futures; worker threads never write to them.
"""

import time
from concurrent.futures import as_completed
from typing import Callable, Iterator, List, Optional, Sequence

from url_comparator.comparison.pair_comparator import failed_outcome
from url_comparator.domain.comparison import (
    AggregateCounters,
    ComparisonReport,
    PairOutcome,
    UrlPair,
)
from url_comparator.execution.task_runner import CompareFn, ConcurrentTaskRunner
from url_comparator.utils.logger import get_logger

logger = get_logger(__name__)

BatchCallback = Callable[[int, AggregateCounters], None]


def chunk_pairs(pairs: Sequence[UrlPair], batch_size: int) -> Iterator[List[UrlPair]]:
    """Yield consecutive chunks of at most ``batch_size`` pairs; the last may be shorter."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    for start in range(0, len(pairs), batch_size):
        yield list(pairs[start : start + batch_size])


class BatchOrchestrator:
    """Sequential batches, concurrent within a batch."""

    def __init__(
        self,
        compare: CompareFn,
        batch_size: int,
        on_batch_complete: Optional[BatchCallback] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            compare: Callable classifying one pair
            batch_size: Concurrency ceiling and chunk size
            on_batch_complete: Optional hook called after each chunk with the
                1-based batch number and the running counters
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.compare = compare
        self.batch_size = batch_size
        self.on_batch_complete = on_batch_complete

    def run(self, pairs: Sequence[UrlPair]) -> ComparisonReport:
        """
        Compare every pair and aggregate the results.

        Args:
            pairs: Ordered pairs to compare

        Returns:
            ComparisonReport with counters and one report line per pair
        """
        report = ComparisonReport()
        if not pairs:
            logger.info("No URL pairs to compare", operation="run_batches")
            return report

        total_batches = (len(pairs) + self.batch_size - 1) // self.batch_size
        with ConcurrentTaskRunner(self.compare, max_workers=self.batch_size) as runner:
            for batch_number, batch in enumerate(chunk_pairs(pairs, self.batch_size), 1):
                start_time = time.time()
                self._run_batch(runner, batch, report)

                logger.info(
                    f"Completed batch {batch_number}/{total_batches}",
                    operation="run_batch",
                    context={
                        "batch_number": batch_number,
                        "batch_pairs": len(batch),
                        "equal": report.counters.equal,
                        "not_equal": report.counters.not_equal,
                        "error": report.counters.error,
                    },
                    duration_ms=(time.time() - start_time) * 1000,
                )
                if self.on_batch_complete is not None:
                    self.on_batch_complete(batch_number, report.counters)

        return report

    def _run_batch(
        self,
        runner: ConcurrentTaskRunner,
        batch: List[UrlPair],
        report: ComparisonReport,
    ) -> None:
        futures = {runner.run_isolated(pair): pair for pair in batch}
        for future in as_completed(futures):
            pair = futures[future]
            try:
                outcome: PairOutcome = future.result()
            except KeyboardInterrupt:
                raise
            except BaseException as e:
                # The runner already supervises its tasks; this only guards the join
                logger.error(
                    "Comparison task did not resolve cleanly",
                    operation="run_batch",
                    context={"pair_index": pair.index},
                    error=str(e),
                )
                outcome = failed_outcome(pair, f"task failed: {e}")
            report.add(outcome)
