"""Rules for turning row objects into positional cell values.

A value counts as present when it is truthy or is exactly ``False``. Empty
strings, ``None`` and ``0`` are written as empty cells on insert.

Updates merge against the current cells with plain truthiness, so an update
can never clear a cell or set it to ``0`` or ``False``: the existing value is
kept instead. Existing sheets rely on this, so it is kept as is.
"""

from collections.abc import Mapping, Sequence
from typing import Any


def has_value(value: Any) -> bool:
    """Whether a value should be projected into its column."""
    return value is False or bool(value)


def project_row(row: Mapping[str, Any], headings: Sequence[str]) -> list[Any]:
    """Order a row's values by heading, using "" for absent values."""
    return [
        row.get(heading) if heading and has_value(row.get(heading)) else ""
        for heading in headings
    ]


def merge_row(new_values: Sequence[Any], current: Sequence[Any]) -> list[Any]:
    """Overlay truthy new values onto the current cells, keeping the current width."""
    return [
        new_values[index] if index < len(new_values) and new_values[index] else value
        for index, value in enumerate(current)
    ]
