"""
Comparison domain model.

Value objects that flow through a single comparison run: URL pairs, fetch
results, structural diff entries, per-pair classifications and the
aggregate handed to the report writer. Everything here is created per run
and discarded afterwards.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class UrlPair:
    """
    One URL from each input list, matched by position.

    Attributes:
        index: Original position in the input lists (traceability only)
        url_a: URL from the first list
        url_b: URL from the second list
    """

    index: int
    url_a: str
    url_b: str


@dataclass(frozen=True)
class FetchResult:
    """Outcome of fetching one URL. Produced once per fetch, never mutated."""

    url: str
    ok: bool
    document: Any = None
    error_message: Optional[str] = None
    status_code: Optional[int] = None

    @classmethod
    def success(
        cls, url: str, document: Any, status_code: Optional[int] = None
    ) -> "FetchResult":
        return cls(url=url, ok=True, document=document, status_code=status_code)

    @classmethod
    def failure(
        cls, url: str, error_message: str, status_code: Optional[int] = None
    ) -> "FetchResult":
        return cls(
            url=url, ok=False, error_message=error_message, status_code=status_code
        )


class DiffKind(Enum):
    """Kind of discrepancy between two JSON documents."""

    VALUE_MISMATCH = "value_mismatch"
    MISSING_IN_SECOND = "missing_in_second"
    MISSING_IN_FIRST = "missing_in_first"


@dataclass(frozen=True)
class DiffEntry:
    """
    A single structural difference.

    Attributes:
        path_segments: Keys from the document root to the difference. For
            missing-key entries the last segment is the missing key.
        kind: What kind of discrepancy this is
        description: Human-readable line used in the report
    """

    path_segments: Tuple[str, ...]
    kind: DiffKind
    description: str

    @property
    def path(self) -> str:
        """Dotted path, ``""`` for the root and ``".a.b"`` below it."""
        return "".join(f".{segment}" for segment in self.path_segments)


class ClassificationKind(Enum):
    """Three-way outcome of comparing a pair."""

    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    COMPARISON_FAILED = "comparison_failed"


@dataclass(frozen=True)
class Classification:
    """
    Tagged classification of one pair.

    ``diff_entries`` is only populated for NOT_EQUAL, ``reason`` only for
    COMPARISON_FAILED.
    """

    kind: ClassificationKind
    diff_entries: Tuple[DiffEntry, ...] = ()
    reason: Optional[str] = None

    @classmethod
    def equal(cls) -> "Classification":
        return cls(kind=ClassificationKind.EQUAL)

    @classmethod
    def not_equal(cls, entries: List[DiffEntry]) -> "Classification":
        if not entries:
            raise ValueError("NOT_EQUAL classification requires at least one diff entry")
        return cls(kind=ClassificationKind.NOT_EQUAL, diff_entries=tuple(entries))

    @classmethod
    def failed(cls, reason: str) -> "Classification":
        return cls(kind=ClassificationKind.COMPARISON_FAILED, reason=reason)


@dataclass(frozen=True)
class PairOutcome:
    """What an isolated comparison task resolves to."""

    pair: UrlPair
    message: str
    classification: Classification

    @property
    def kind(self) -> ClassificationKind:
        return self.classification.kind

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "index": self.pair.index,
            "url_a": self.pair.url_a,
            "url_b": self.pair.url_b,
            "classification": self.kind.value,
            "reason": self.classification.reason,
            "differences": [
                {"path": entry.path, "kind": entry.kind.value, "description": entry.description}
                for entry in self.classification.diff_entries
            ],
        }


@dataclass
class AggregateCounters:
    """Running equal / not-equal / error counts. Only ever incremented."""

    equal: int = 0
    not_equal: int = 0
    error: int = 0

    def record(self, kind: ClassificationKind) -> None:
        if kind is ClassificationKind.EQUAL:
            self.equal += 1
        elif kind is ClassificationKind.NOT_EQUAL:
            self.not_equal += 1
        else:
            self.error += 1

    @property
    def total(self) -> int:
        return self.equal + self.not_equal + self.error

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass
class ComparisonReport:
    """
    Aggregate result of one run.

    ``lines`` holds one message per pair, appended in completion order within
    each batch; batches themselves appear in submission order.
    """

    counters: AggregateCounters = field(default_factory=AggregateCounters)
    lines: List[str] = field(default_factory=list)
    outcomes: List[PairOutcome] = field(default_factory=list)

    def add(self, outcome: PairOutcome) -> None:
        self.counters.record(outcome.kind)
        self.lines.append(outcome.message)
        self.outcomes.append(outcome)
