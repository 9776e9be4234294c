"""Input/output collaborators - URL list reading and report writing."""

from .report_writer import ReportWriter
from .url_reader import read_urls_from_csv

__all__ = ["ReportWriter", "read_urls_from_csv"]
