from __future__ import annotations

import json
from typing import Any, List


def searchable_text(record: Any) -> str:
    try:
        text = json.dumps(record, ensure_ascii=False, separators=(',', ':'))
    except (TypeError, ValueError):
        text = str(record)
    return text.lower()


def filter_records(records: List[Any], query: str) -> List[Any]:
    """Keep records whose whole serialised form contains `query` (case-insensitive).

    An empty or whitespace-only query keeps everything. Always returns a new list.
    """
    needle = (query or '').lower().strip()
    if not needle:
        return list(records)
    return [record for record in records if needle in searchable_text(record)]
