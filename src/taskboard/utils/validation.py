"""Validation helpers for board data.

Project columns reach the service in two persisted shapes: a native JSON
array (PostgreSQL ``json``/``jsonb`` columns written by other clients) or a
JSON-encoded string (the portable ``Text`` column this package writes).
:func:`normalize_columns` is the single read path that turns either into a
Python list.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from taskboard.core.types import DEFAULT_COLUMNS

logger = logging.getLogger(__name__)

_MAX_COLUMN_NAME = 255


def normalize_columns(raw: Any, default: Sequence[str] = DEFAULT_COLUMNS) -> list[str]:
    """Return the column list stored in *raw*, or *default* when absent/empty.

    >>> normalize_columns('["Todo", "Done"]')
    ['Todo', 'Done']
    >>> normalize_columns(["Todo"])
    ['Todo']
    >>> normalize_columns(None)
    ['Todo', 'Sprint', 'Review', 'Completed']
    """
    if isinstance(raw, (list, tuple)):
        columns = [str(c) for c in raw]
    elif isinstance(raw, str) and raw.strip():
        try:
            decoded = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Unparseable columns value %r, using defaults", raw[:80])
            decoded = None
        columns = [str(c) for c in decoded] if isinstance(decoded, list) else []
    else:
        columns = []
    return columns or list(default)


def encode_columns(columns: Sequence[str]) -> str:
    """Serialise *columns* for the ``Text`` storage column (lossless round-trip)."""
    return json.dumps(list(columns), ensure_ascii=False)


def find_column_problem(columns: Sequence[Any]) -> str | None:
    """Return a human-readable problem with *columns*, or ``None`` if valid.

    Valid means: every entry is a non-blank string of reasonable length and
    no name appears twice.
    """
    seen: set[str] = set()
    for name in columns:
        if not isinstance(name, str) or not name.strip():
            return "must contain only non-empty strings"
        if len(name) > _MAX_COLUMN_NAME:
            return f"entries must be at most {_MAX_COLUMN_NAME} characters"
        if name in seen:
            return f"contains duplicate column {name!r}"
        seen.add(name)
    return None


def is_permutation(candidate: Sequence[str], current: Sequence[str]) -> bool:
    """True when *candidate* holds exactly the names of *current*, in any order."""
    return sorted(candidate) == sorted(current)


def dedupe_preserving_order(values: Sequence[str]) -> list[str]:
    """Drop repeated values, keeping each first occurrence.

    >>> dedupe_preserving_order(["u1", "u2", "u1"])
    ['u1', 'u2']
    """
    return list(dict.fromkeys(values))


def decode_labels(raw: str | None) -> list[str]:
    """Decode the JSON text stored for task labels."""
    try:
        value = json.loads(raw or "[]")
    except (json.JSONDecodeError, TypeError):
        return []
    return [str(v) for v in value] if isinstance(value, list) else []


__all__ = [
    "decode_labels",
    "dedupe_preserving_order",
    "encode_columns",
    "find_column_problem",
    "is_permutation",
    "normalize_columns",
]
