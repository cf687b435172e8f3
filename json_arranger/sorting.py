from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, List, Optional

from .records import IDENTIFYING_FIELD, display_value, to_number

ASCENDING = 1
DESCENDING = -1


@dataclass(frozen=True)
class SortSpec:
    """Active sort column and direction; `column=None` means default ordering."""

    column: Optional[str] = None
    direction: int = ASCENDING


def next_sort_spec(spec: Optional[SortSpec], column: Optional[str]) -> SortSpec:
    """Selecting the active column flips its direction, a new column sorts ascending."""
    if column is None:
        return SortSpec()
    if spec is not None and spec.column == column:
        return SortSpec(column, -spec.direction)
    return SortSpec(column, ASCENDING)


def _numeric(value: Any):
    if value is None:
        return None
    return to_number(value)


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _collation_key(text: str):
    """Base letters first, then accents, then case, like a root-locale collation.

    Plain string tuples, so it never depends on (or fails in) the process locale.
    """
    folded = text.casefold()
    return (_strip_accents(folded), unicodedata.normalize("NFC", folded), text)


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_values(a: Any, b: Any) -> int:
    """Type-aware comparison: numerically when both sides are numeric, else as text."""
    na, nb = _numeric(a), _numeric(b)
    if na is not None and nb is not None:
        return _cmp(na, nb)
    sa = '' if a is None else display_value(a)
    sb = '' if b is None else display_value(b)
    return _cmp(_collation_key(sa), _collation_key(sb))


def _field(record: Any, column: str) -> Any:
    if isinstance(record, dict):
        return record.get(column)
    return None


def _default_key(record: Any):
    number = _numeric(_field(record, IDENTIFYING_FIELD))
    return 0 if number is None else number


def sort_records(records: List[Any], spec: Optional[SortSpec] = None) -> List[Any]:
    """Stable sort of records by `spec`.

    Without a sort column, records are ordered by ascending numeric `data`
    when any record has that field, and otherwise keep their input order.
    """
    spec = spec or SortSpec()

    if spec.column is not None:
        column, direction = spec.column, spec.direction

        def comparator(a, b):
            return compare_values(_field(a, column), _field(b, column)) * direction

        return sorted(records, key=cmp_to_key(comparator))

    if any(isinstance(r, dict) and IDENTIFYING_FIELD in r for r in records):
        return sorted(records, key=_default_key)

    return list(records)
