"""
Comparison Engine - facade over the batch comparison pipeline.

Validates the input lists, pairs them up to ``limit``, runs the batches and
hands the aggregate to the report writer.
"""

from typing import Callable, List, Optional, Sequence

from url_comparator.api.fetcher import JsonFetcher, build_session
from url_comparator.comparison.pair_comparator import PairComparator
from url_comparator.config.settings import Settings
from url_comparator.domain.comparison import ComparisonReport, UrlPair
from url_comparator.exceptions import ConfigurationError
from url_comparator.execution.batch import BatchCallback, BatchOrchestrator
from url_comparator.io.report_writer import ReportWriter
from url_comparator.io.url_reader import read_urls_from_csv
from url_comparator.utils.logger import get_logger, log_operation

logger = get_logger(__name__)


def _require_positive_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
    return value


def build_pairs(urls_a: Sequence[str], urls_b: Sequence[str], limit: int) -> List[UrlPair]:
    """
    Zip the two lists positionally after truncating both to ``limit``.

    Rows past ``limit`` are never read, so only the truncated lengths must match.

    Raises:
        ConfigurationError: If the truncated lists differ in length
    """
    first = list(urls_a[:limit])
    second = list(urls_b[:limit])
    if len(first) != len(second):
        raise ConfigurationError(
            f"URL lists must have the same number of rows "
            f"(first: {len(first)}, second: {len(second)})"
        )
    return [
        UrlPair(index=index, url_a=url_a, url_b=url_b)
        for index, (url_a, url_b) in enumerate(zip(first, second))
    ]


class ComparisonEngine:
    """
    Owns the input lists, ``limit`` and ``batch_size`` for one run.

    Usage:
        engine = ComparisonEngine(urls_a, urls_b, limit=1000, batch_size=100)
        report = engine.run()
    """

    def __init__(
        self,
        urls_a: Sequence[str],
        urls_b: Sequence[str],
        limit: int,
        batch_size: int,
        comparator: Optional[PairComparator] = None,
        report_writer: Optional[ReportWriter] = None,
        on_batch_complete: Optional[BatchCallback] = None,
    ):
        """
        Initialize engine.

        Args:
            urls_a: URLs from the first source
            urls_b: URLs from the second source, same length as ``urls_a`` up to ``limit``
            limit: Maximum number of pairs compared (truncates both lists)
            batch_size: Maximum number of pairs compared concurrently
            comparator: PairComparator to use (default one sized to ``batch_size``)
            report_writer: Optional writer receiving the final report
            on_batch_complete: Optional hook called after every batch
        """
        self.urls_a = list(urls_a)
        self.urls_b = list(urls_b)
        self.limit = limit
        self.batch_size = batch_size
        self.comparator = comparator
        self.report_writer = report_writer
        self.on_batch_complete = on_batch_complete

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        reader: Callable[..., List[str]] = read_urls_from_csv,
    ) -> "ComparisonEngine":
        """
        Build an engine from settings: read both URL lists and wire the
        fetcher and report writer.

        Raises:
            InputFileError: If either URL list cannot be read
        """
        urls_a = reader(settings.file_a, limit=settings.limit, column=settings.url_column)
        urls_b = reader(settings.file_b, limit=settings.limit, column=settings.url_column)

        # Two fetches per pair can be in flight for every pair of the batch
        session = build_session(pool_size=settings.batch_size * 2, headers=settings.headers)
        comparator = PairComparator(JsonFetcher(session=session, timeout=settings.timeout))

        return cls(
            urls_a,
            urls_b,
            limit=settings.limit,
            batch_size=settings.batch_size,
            comparator=comparator,
            report_writer=ReportWriter(settings.output_file, settings.json_report_file),
        )

    @log_operation("comparison_run")
    def run(self) -> ComparisonReport:
        """
        Execute the run.

        Returns:
            ComparisonReport with counters and report lines

        Raises:
            ConfigurationError: Before any fetch, if the lists differ in length
                once truncated to ``limit``, or if ``limit``/``batch_size`` are not
                positive integers
        """
        limit = _require_positive_int("limit", self.limit)
        batch_size = _require_positive_int("batch_size", self.batch_size)
        pairs = build_pairs(self.urls_a, self.urls_b, limit)

        logger.info(
            "Starting comparison",
            operation="comparison_run",
            context={"pairs": len(pairs), "batch_size": batch_size},
        )

        comparator = self.comparator
        if comparator is None:
            session = build_session(pool_size=batch_size * 2)
            comparator = PairComparator(JsonFetcher(session=session))

        orchestrator = BatchOrchestrator(
            comparator.compare, batch_size, on_batch_complete=self.on_batch_complete
        )
        report = orchestrator.run(pairs)

        logger.info(
            "Comparison complete",
            operation="comparison_run",
            context=report.counters.to_dict(),
        )

        if self.report_writer is not None:
            self.report_writer.write(report)
        return report
