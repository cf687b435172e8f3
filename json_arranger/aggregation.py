from __future__ import annotations

import logging
from typing import Any, Dict, List

from .records import (
    IDENTIFYING_FIELD,
    CategoryKind,
    classify,
    has_identifying_field,
    identifying_key,
    to_number,
)

logger = logging.getLogger(__name__)


def _number_or_zero(value: Any):
    number = to_number(value)
    return 0 if number is None else number


def _timer_is_lower(incoming: Any, current: Any) -> bool:
    if incoming is None or current is None:
        return False
    new, cur = to_number(incoming), to_number(current)
    if new is None or cur is None:
        return False
    return new < cur


def merge_into(merged: Dict[str, Any], record: Dict[str, Any]) -> Dict[str, Any]:
    """Fold a later record sharing the same key into `merged` (in place).

    `cnt` is summed, `lvl` keeps the maximum, `timer` keeps the smallest
    non-null value and `helper_recurrent` is OR-ed. Every other field is only
    copied when `merged` does not have it yet, so the first occurrence wins.
    """
    if 'cnt' in record:
        merged['cnt'] = _number_or_zero(merged.get('cnt')) + _number_or_zero(record.get('cnt'))
    if 'lvl' in record:
        merged['lvl'] = max(_number_or_zero(merged.get('lvl')), _number_or_zero(record.get('lvl')))
    if 'timer' in record:
        if 'timer' not in merged or _timer_is_lower(record['timer'], merged['timer']):
            merged['timer'] = record['timer']
    if 'helper_recurrent' in record:
        merged['helper_recurrent'] = merged.get('helper_recurrent') or record['helper_recurrent']

    for key, value in record.items():
        if key not in merged:
            merged[key] = value
    return merged


def aggregate(records: List[Any]) -> List[Dict[str, Any]]:
    """Collapse records into one record per distinct numeric `data` value.

    Records without a usable `data` field are dropped. The result is ordered
    by ascending `data`, whatever the input order was.
    """
    by_key: Dict[str, Dict[str, Any]] = {}
    numbers: Dict[str, Any] = {}
    dropped = 0

    for record in records:
        key = identifying_key(record)
        if key is None:
            dropped += 1
            continue
        if key not in by_key:
            by_key[key] = dict(record)
            numbers[key] = to_number(record[IDENTIFYING_FIELD])
        else:
            merge_into(by_key[key], record)

    if dropped:
        logger.debug(f"Skipped {dropped} records without a numeric '{IDENTIFYING_FIELD}' field")

    ordered_keys = sorted(by_key, key=lambda k: numbers[k])
    return [by_key[k] for k in ordered_keys]


def should_aggregate(value: Any) -> bool:
    return classify(value) is CategoryKind.RECORD_LIST and any(has_identifying_field(r) for r in value)


def aggregate_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of the document with every keyed record list aggregated.

    Categories that are not record lists, or whose records carry no `data`
    field, are passed through untouched.
    """
    output: Dict[str, Any] = {}
    aggregated = 0
    removed = 0
    for category, value in document.items():
        if should_aggregate(value):
            output[category] = aggregate(value)
            aggregated += 1
            removed += len(value) - len(output[category])
        else:
            output[category] = value

    logger.info(f"Aggregated {aggregated} categories, {removed} records merged or dropped")
    return output
