"""Report Writer - serialize a comparison run as a text report and optional JSON artifact."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

from url_comparator.domain.comparison import ComparisonReport
from url_comparator.exceptions import ReportWriteError

logger = logging.getLogger(__name__)


class ReportWriter:
    """
    Write the aggregate of a run to disk.

    The text report starts with the summary header (``Equal``, ``Not Equal``,
    ``Errors``) followed by one block per pair separated by blank lines.
    """

    def __init__(self, output_file: Path | str, json_report_file: Path | str | None = None) -> None:
        self.output_file = Path(output_file)
        self.json_report_file = Path(json_report_file) if json_report_file is not None else None

    @staticmethod
    def generate_text_report(report: ComparisonReport) -> str:
        counters = report.counters
        summary = (
            f"Equal: {counters.equal}\n"
            f"Not Equal: {counters.not_equal}\n"
            f"Errors: {counters.error}\n\n"
        )
        return summary + "\n\n".join(report.lines)

    @staticmethod
    def generate_json_report(report: ComparisonReport) -> str:
        total = report.counters.total
        statistics: Dict[str, Any] = {
            **report.counters.to_dict(),
            "total_pairs": total,
            "equal_rate": round(report.counters.equal / total * 100, 1) if total else 0.0,
        }
        payload = {
            "metadata": {"generated_at": datetime.now().isoformat()},
            "statistics": statistics,
            "results": [outcome.to_dict() for outcome in report.outcomes],
        }
        return json.dumps(payload, indent=2, ensure_ascii=False, default=str)

    def write(self, report: ComparisonReport) -> Path:
        """
        Write the text report (and the JSON artifact when configured).

        Returns:
            Path of the text report

        Raises:
            ReportWriteError: If a report file or its directory cannot be written
        """
        self._write_file(self.output_file, self.generate_text_report(report))
        logger.info("Wrote comparison report: %s", self.output_file)

        if self.json_report_file is not None:
            self._write_file(self.json_report_file, self.generate_json_report(report))
            logger.info("Wrote JSON comparison report: %s", self.json_report_file)

        return self.output_file

    @staticmethod
    def _write_file(path: Path, content: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ReportWriteError(f"Failed to write report {path}: {e}") from e
