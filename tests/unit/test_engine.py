"""
Unit tests for ComparisonEngine and build_pairs.

Covers input validation, limit truncation, report hand-off and wiring from settings.
"""

from unittest.mock import Mock, patch

import pytest

from url_comparator.comparison.pair_comparator import PairComparator, render_equal
from url_comparator.config.settings import Settings
from url_comparator.domain.comparison import Classification, PairOutcome
from url_comparator.engine import ComparisonEngine, build_pairs
from url_comparator.exceptions import ConfigurationError
from url_comparator.io.report_writer import ReportWriter


def _comparator():
    comparator = Mock(spec=PairComparator)
    comparator.compare.side_effect = lambda pair: PairOutcome(
        pair=pair, message=render_equal(pair), classification=Classification.equal()
    )
    return comparator


class TestBuildPairs:
    """Tests for build_pairs."""

    def test_zips_positionally(self):
        pairs = build_pairs(["a0", "a1"], ["b0", "b1"], limit=10)

        assert [(p.index, p.url_a, p.url_b) for p in pairs] == [(0, "a0", "b0"), (1, "a1", "b1")]

    def test_limit_truncates_both_lists_preserving_order(self):
        pairs = build_pairs(["a0", "a1", "a2", "a3"], ["b0", "b1", "b2", "b3"], limit=2)

        assert [(p.url_a, p.url_b) for p in pairs] == [("a0", "b0"), ("a1", "b1")]

    def test_mismatched_lengths(self):
        with pytest.raises(ConfigurationError, match="same number of rows"):
            build_pairs(["a0", "a1"], ["b0"], limit=10)

    def test_lists_differing_only_beyond_limit(self):
        pairs = build_pairs(["a"] * 5, ["b"] * 6, limit=3)

        assert [p.index for p in pairs] == [0, 1, 2]

    def test_mismatch_within_limit_reports_truncated_lengths(self):
        with pytest.raises(ConfigurationError, match=r"first: 3, second: 2"):
            build_pairs(["a"] * 5, ["b"] * 2, limit=3)


class TestComparisonEngine:
    """Tests for ComparisonEngine.run."""

    def test_mismatched_lengths_fail_before_any_fetch(self):
        comparator = _comparator()
        engine = ComparisonEngine(["a0", "a1"], ["b0"], limit=10, batch_size=2, comparator=comparator)

        with pytest.raises(ConfigurationError):
            engine.run()

        comparator.compare.assert_not_called()

    def test_mismatched_lengths_write_no_report(self):
        writer = Mock(spec=ReportWriter)
        engine = ComparisonEngine(
            ["a0"], [], limit=10, batch_size=2, comparator=_comparator(), report_writer=writer
        )

        with pytest.raises(ConfigurationError):
            engine.run()

        writer.write.assert_not_called()

    @pytest.mark.parametrize("limit, batch_size", [(0, 1), (1, 0), (-5, 1), ("10", 1), (True, 1)])
    def test_non_positive_limit_or_batch_size(self, limit, batch_size):
        comparator = _comparator()
        engine = ComparisonEngine(["a"], ["b"], limit=limit, batch_size=batch_size, comparator=comparator)

        with pytest.raises(ConfigurationError):
            engine.run()

        comparator.compare.assert_not_called()

    def test_limit_smaller_than_lists(self):
        comparator = _comparator()
        urls_a = [f"https://a/{i}" for i in range(5)]
        urls_b = [f"https://b/{i}" for i in range(5)]

        report = ComparisonEngine(urls_a, urls_b, limit=3, batch_size=2, comparator=comparator).run()

        compared = sorted((c.args[0].url_a, c.args[0].url_b) for c in comparator.compare.call_args_list)
        assert compared == [("https://a/0", "https://b/0"), ("https://a/1", "https://b/1"), ("https://a/2", "https://b/2")]
        assert report.counters.total == 3

    def test_lists_differing_beyond_limit_are_compared(self):
        comparator = _comparator()

        report = ComparisonEngine(["a"] * 5, ["b"] * 6, limit=3, batch_size=2, comparator=comparator).run()

        assert comparator.compare.call_count == 3
        assert report.counters.total == 3

    def test_report_handed_to_writer(self):
        writer = Mock(spec=ReportWriter)

        report = ComparisonEngine(
            ["a0", "a1"], ["b0", "b1"], limit=10, batch_size=5, comparator=_comparator(), report_writer=writer
        ).run()

        writer.write.assert_called_once_with(report)
        assert report.counters.equal == 2

    def test_empty_lists(self):
        report = ComparisonEngine([], [], limit=10, batch_size=5, comparator=_comparator()).run()

        assert report.counters.total == 0
        assert report.lines == []


class TestFromSettings:
    """Tests for ComparisonEngine.from_settings."""

    def test_reads_both_files_with_limit_and_column(self, tmp_path):
        reader = Mock(side_effect=[["a0", "a1"], ["b0", "b1"]])
        settings = Settings(
            file_a="first.csv",
            file_b="second.csv",
            output_file=str(tmp_path / "report.txt"),
            limit=2,
            batch_size=3,
            url_column="endpoint",
        )

        engine = ComparisonEngine.from_settings(settings, reader=reader)

        reader.assert_any_call("first.csv", limit=2, column="endpoint")
        reader.assert_any_call("second.csv", limit=2, column="endpoint")
        assert engine.urls_a == ["a0", "a1"]
        assert engine.urls_b == ["b0", "b1"]
        assert engine.batch_size == 3
        assert isinstance(engine.report_writer, ReportWriter)
        assert engine.report_writer.output_file == tmp_path / "report.txt"

    def test_session_sized_for_batch_and_carries_headers(self, tmp_path):
        reader = Mock(side_effect=[[], []])
        settings = Settings(
            output_file=str(tmp_path / "report.txt"),
            batch_size=4,
            timeout=2.5,
            headers={"Authorization": "Bearer token-123"},
        )

        with patch("url_comparator.engine.build_session") as build_session:
            engine = ComparisonEngine.from_settings(settings, reader=reader)

        build_session.assert_called_once_with(
            pool_size=8, headers={"Authorization": "Bearer token-123"}
        )
        assert engine.comparator.fetcher.timeout == 2.5
