"""Comparison - structural JSON diff and pair classification."""

from .json_diff import JsonKind, diff_json, json_kind, strict_equal
from .pair_comparator import PairComparator

__all__ = ["JsonKind", "PairComparator", "diff_json", "json_kind", "strict_equal"]
