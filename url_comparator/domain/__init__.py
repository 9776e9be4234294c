"""Domain models - comparison value objects."""

from .comparison import (
    AggregateCounters,
    Classification,
    ClassificationKind,
    ComparisonReport,
    DiffEntry,
    DiffKind,
    FetchResult,
    PairOutcome,
    UrlPair,
)

__all__ = [
    "AggregateCounters",
    "Classification",
    "ClassificationKind",
    "ComparisonReport",
    "DiffEntry",
    "DiffKind",
    "FetchResult",
    "PairOutcome",
    "UrlPair",
]
