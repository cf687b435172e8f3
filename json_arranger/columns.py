from __future__ import annotations

from typing import Any, Dict, List

from .records import IDENTIFYING_FIELD, display_value


def project_columns(records: List[Any]) -> List[str]:
    """Union of field names across heterogeneous records.

    Columns keep their order of first discovery; `data` is moved to the front
    when any record has it.
    """
    seen: Dict[str, None] = {}
    for record in records:
        if not isinstance(record, dict):
            continue
        for key in record:
            seen.setdefault(key, None)

    columns = list(seen)
    if IDENTIFYING_FIELD in seen:
        columns.remove(IDENTIFYING_FIELD)
        columns.insert(0, IDENTIFYING_FIELD)
    return columns


def build_rows(records: List[Any], columns: List[str]) -> List[List[str]]:
    rows: List[List[str]] = []
    for record in records:
        if not isinstance(record, dict):
            record = {}
        rows.append(['' if col not in record else display_value(record[col]) for col in columns])
    return rows
