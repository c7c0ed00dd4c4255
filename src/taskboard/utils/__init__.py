"""Utility functions and helpers."""

from taskboard.utils.validation import (
    dedupe_preserving_order,
    find_column_problem,
    normalize_columns,
)

__all__ = [
    "dedupe_preserving_order",
    "find_column_problem",
    "normalize_columns",
]
