"""
Pair Comparator

Fetches both URLs of a pair in parallel, diffs the two documents and
classifies the pair as equal, not equal or failed. The rendered message is
the exact line that ends up in the report.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple

from url_comparator.api.fetcher import JsonFetcher
from url_comparator.comparison.json_diff import diff_json
from url_comparator.domain.comparison import (
    Classification,
    DiffEntry,
    FetchResult,
    PairOutcome,
    UrlPair,
)
from url_comparator.utils.logger import get_logger

logger = get_logger(__name__)

Differ = Callable[[object, object], List[DiffEntry]]


def render_equal(pair: UrlPair) -> str:
    return f"{pair.url_a} equals {pair.url_b}"


def render_not_equal(pair: UrlPair, entries: List[DiffEntry]) -> str:
    details = "\n".join(entry.description for entry in entries)
    return f"{pair.url_a} not equals {pair.url_b}\n{details}"


def render_failed(pair: UrlPair) -> str:
    return f"Comparison failed for {pair.url_a} and {pair.url_b}"


def failed_outcome(pair: UrlPair, reason: str) -> PairOutcome:
    """Outcome used whenever a pair cannot be compared, for whatever reason."""
    return PairOutcome(
        pair=pair,
        message=render_failed(pair),
        classification=Classification.failed(reason),
    )


class PairComparator:
    """
    Compare the two documents behind a UrlPair.

    Both fetches run concurrently, so the latency of a pair is the slower of
    its two fetches rather than their sum.
    """

    def __init__(
        self,
        fetcher: Optional[JsonFetcher] = None,
        differ: Optional[Differ] = None,
    ):
        """
        Initialize comparator.

        Args:
            fetcher: JsonFetcher used for both sides (a default one is built if omitted)
            differ: Structural diff function, ``diff_json`` by default
        """
        self.fetcher = fetcher if fetcher is not None else JsonFetcher()
        self.differ = differ if differ is not None else diff_json

    def fetch_pair(self, pair: UrlPair) -> Tuple[FetchResult, FetchResult]:
        with ThreadPoolExecutor(max_workers=2) as executor:
            future_a = executor.submit(self.fetcher.fetch, pair.url_a)
            future_b = executor.submit(self.fetcher.fetch, pair.url_b)
            return future_a.result(), future_b.result()

    def compare(self, pair: UrlPair) -> PairOutcome:
        """
        Classify one pair.

        Args:
            pair: URL pair to compare

        Returns:
            PairOutcome carrying the report message and the classification
        """
        result_a, result_b = self.fetch_pair(pair)

        if not (result_a.ok and result_b.ok):
            reason = self._failure_reason(result_a, result_b)
            logger.info(
                "Comparison failed",
                operation="compare_pair",
                context={"pair_index": pair.index, "reason": reason},
            )
            return failed_outcome(pair, reason)

        entries = self.differ(result_a.document, result_b.document)
        if not entries:
            return PairOutcome(
                pair=pair,
                message=render_equal(pair),
                classification=Classification.equal(),
            )

        logger.debug(
            "Documents differ",
            operation="compare_pair",
            context={"pair_index": pair.index, "difference_count": len(entries)},
        )
        return PairOutcome(
            pair=pair,
            message=render_not_equal(pair, entries),
            classification=Classification.not_equal(entries),
        )

    @staticmethod
    def _failure_reason(result_a: FetchResult, result_b: FetchResult) -> str:
        failures = []
        if not result_a.ok:
            failures.append(f"first URL failed: {result_a.error_message}")
        if not result_b.ok:
            failures.append(f"second URL failed: {result_b.error_message}")
        return "; ".join(failures)
