"""
Structural JSON diff.

Recursive comparison of two parsed JSON values. Only objects are descended
into; every other kind, arrays included, is compared as an opaque value.
Existing report consumers rely on arrays being reported as a single
mismatch, so per-element array diffing is intentionally not done.
"""

import json
from enum import Enum
from typing import Any, List, Tuple

from url_comparator.domain.comparison import DiffEntry, DiffKind


class JsonKind(Enum):
    """Tag for a parsed JSON value, decided once per value."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def json_kind(value: Any) -> JsonKind:
    """
    Classify a parsed JSON value.

    ``bool`` is checked before numbers since it subclasses ``int``. Tuples
    are accepted as arrays so hand-built documents behave like decoded ones.

    Raises:
        TypeError: If the value cannot come out of a JSON decoder
    """
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def strict_equal(a: Any, b: Any) -> bool:
    """Value equality that never treats booleans and numbers as interchangeable."""
    kind_a = json_kind(a)
    if kind_a is not json_kind(b):
        return False

    if kind_a is JsonKind.ARRAY:
        return len(a) == len(b) and all(strict_equal(x, y) for x, y in zip(a, b))
    if kind_a is JsonKind.OBJECT:
        return a.keys() == b.keys() and all(strict_equal(a[key], b[key]) for key in a)
    return a == b


def render_path(path: Tuple[str, ...]) -> str:
    return "".join(f".{segment}" for segment in path)


def _render_value(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


def diff_json(first: Any, second: Any) -> List[DiffEntry]:
    """
    Compute the structural differences between two JSON documents.

    Args:
        first: Parsed JSON document from the first URL
        second: Parsed JSON document from the second URL

    Returns:
        Flat list of DiffEntry in deterministic order (first document's key
        order, then keys only present in the second). Empty when the
        documents are structurally identical.

    Example:
        >>> [e.description for e in diff_json({"a": 1}, {"a": 2})]
        ['Difference at .a: 1 !== 2']
    """
    differences: List[DiffEntry] = []
    _collect(differences, (), first, second)
    return differences


def _collect(
    differences: List[DiffEntry],
    path: Tuple[str, ...],
    first: Any,
    second: Any,
) -> None:
    if json_kind(first) is not JsonKind.OBJECT or json_kind(second) is not JsonKind.OBJECT:
        if not strict_equal(first, second):
            differences.append(
                DiffEntry(
                    path_segments=path,
                    kind=DiffKind.VALUE_MISMATCH,
                    description=(
                        f"Difference at {render_path(path)}: "
                        f"{_render_value(first)} !== {_render_value(second)}"
                    ),
                )
            )
        return

    for key, value in first.items():
        if key not in second:
            differences.append(
                DiffEntry(
                    path_segments=path + (str(key),),
                    kind=DiffKind.MISSING_IN_SECOND,
                    description=f"Missing key in second JSON at {render_path(path)}: {key}",
                )
            )
        else:
            _collect(differences, path + (str(key),), value, second[key])

    for key in second:
        if key not in first:
            differences.append(
                DiffEntry(
                    path_segments=path + (str(key),),
                    kind=DiffKind.MISSING_IN_FIRST,
                    description=f"Missing key in first JSON at {render_path(path)}: {key}",
                )
            )
