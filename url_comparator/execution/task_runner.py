"""
Concurrent Task Runner

Runs one pair comparison per isolated task on a bounded thread pool. The
task is supervised: whatever happens inside it, its future resolves with a
PairOutcome, so a crashing pair can neither stall nor break its batch.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from url_comparator.domain.comparison import PairOutcome, UrlPair
from url_comparator.comparison.pair_comparator import failed_outcome
from url_comparator.exceptions import ExecutionCrash
from url_comparator.utils.logger import get_logger

logger = get_logger(__name__)

CompareFn = Callable[[UrlPair], PairOutcome]


class ConcurrentTaskRunner:
    """
    Bounded pool of isolated comparison tasks.

    Usage:
        with ConcurrentTaskRunner(comparator.compare, max_workers=10) as runner:
            future = runner.run_isolated(pair)
            outcome = future.result()  # never raises
    """

    def __init__(self, compare: CompareFn, max_workers: int):
        """
        Initialize runner.

        Args:
            compare: Callable classifying one pair (usually PairComparator.compare)
            max_workers: Pool size; the orchestrator never submits more than
                this many tasks at once
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {max_workers}")
        self.compare = compare
        self.max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None

    def __enter__(self) -> "ConcurrentTaskRunner":
        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="pair-compare"
        )
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def run_isolated(self, pair: UrlPair) -> "Future[PairOutcome]":
        """
        Submit ``pair`` for comparison in its own task.

        Returns:
            Future that always resolves to a PairOutcome
        """
        if self._executor is None:
            raise RuntimeError("ConcurrentTaskRunner must be used as a context manager")
        return self._executor.submit(self._supervised, pair)

    def _supervised(self, pair: UrlPair) -> PairOutcome:
        try:
            return self.compare(pair)
        except KeyboardInterrupt:
            raise
        except BaseException as e:
            crash = ExecutionCrash(pair.index, e)
            logger.error(
                "Comparison task crashed",
                operation="run_isolated",
                context={"pair_index": pair.index},
                error=str(crash),
            )
            return failed_outcome(pair, str(crash))
