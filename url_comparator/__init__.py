"""
URL Comparator

Bulk structural comparison of paired remote JSON resources.
"""

from .engine import ComparisonEngine, build_pairs
from .exceptions import (
    ComparatorException,
    ConfigurationError,
    ExecutionCrash,
    FetchError,
    InputFileError,
    ReportWriteError,
)

__version__ = "1.0.0"
__all__ = [
    "ComparisonEngine",
    "build_pairs",
    "ComparatorException",
    "ConfigurationError",
    "ExecutionCrash",
    "FetchError",
    "InputFileError",
    "ReportWriteError",
]
