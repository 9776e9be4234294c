"""
Command-line entry point for the URL comparator.

Usage:
    url-comparator --file-a data/file1.csv --file-b data/file2.csv \
        --output output/comparison_report.txt --limit 1000 --batch-size 100

Exit status: 0 when the run completes (individual pair failures included),
2 when the run is aborted by a configuration or input problem, 1 when the
report cannot be written.
"""

import argparse
import sys
from typing import Optional, Sequence

from url_comparator.config.settings import (
    LOG_LEVELS,
    Settings,
    setup_logging_redaction,
)
from url_comparator.engine import ComparisonEngine
from url_comparator.exceptions import ConfigurationError, InputFileError, ReportWriteError
from url_comparator.utils.logger import configure_logging


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fetch paired JSON URLs from two CSV files and report structural differences."
    )
    parser.add_argument("--config", help="Optional YAML configuration file.")
    parser.add_argument("--file-a", help="CSV file with the first list of URLs.")
    parser.add_argument("--file-b", help="CSV file with the second list of URLs.")
    parser.add_argument("--output", dest="output_file", help="Path of the text report.")
    parser.add_argument(
        "--json-report",
        dest="json_report_file",
        help="Optional path of a JSON report with per-pair details.",
    )
    parser.add_argument("--limit", type=int, help="Maximum number of URL pairs to compare.")
    parser.add_argument(
        "--batch-size",
        type=int,
        help="Number of pairs compared concurrently in each batch.",
    )
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds.")
    parser.add_argument("--url-column", help="CSV column holding the URLs (default: url).")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Log level.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    try:
        settings = Settings.load(
            config_path=args.config,
            file_a=args.file_a,
            file_b=args.file_b,
            output_file=args.output_file,
            json_report_file=args.json_report_file,
            limit=args.limit,
            batch_size=args.batch_size,
            timeout=args.timeout,
            url_column=args.url_column,
            log_level=args.log_level,
        )
    except ConfigurationError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2

    configure_logging(settings.log_level, setup_logging_redaction(settings))

    try:
        engine = ComparisonEngine.from_settings(settings)
        report = engine.run()
    except (ConfigurationError, InputFileError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2
    except ReportWriteError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    counters = report.counters
    print(
        f"Comparison complete: {counters.equal} equal, {counters.not_equal} not equal, "
        f"{counters.error} errors. Report: {settings.output_file}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
