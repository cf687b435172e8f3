from __future__ import annotations

import json
import math
from enum import Enum
from typing import Any, Optional, Union

Number = Union[int, float]

IDENTIFYING_FIELD = 'data'

_SCALAR_TYPES = (str, int, float, bool)


class CategoryKind(Enum):
    SCALAR_LIST = 'scalar_list'
    RECORD_LIST = 'record_list'
    OPAQUE = 'opaque'


def is_scalar(value: Any) -> bool:
    return value is None or isinstance(value, _SCALAR_TYPES)


def classify(value: Any) -> CategoryKind:
    """Decide how a category value is rendered and transformed.

    - list of scalars (including the empty list) -> SCALAR_LIST
    - list whose first element is a dict         -> RECORD_LIST
    - anything else                              -> OPAQUE
    """
    if not isinstance(value, list):
        return CategoryKind.OPAQUE
    if all(is_scalar(v) for v in value):
        return CategoryKind.SCALAR_LIST
    if isinstance(value[0], dict):
        return CategoryKind.RECORD_LIST
    return CategoryKind.OPAQUE


def _parse_numeric_text(text: str) -> Optional[Number]:
    text = text.strip()
    if not text:
        return 0
    if '_' in text:
        return None

    lowered = text.lower()
    for prefix, base in (('0x', 16), ('0o', 8), ('0b', 2)):
        if lowered.startswith(prefix):
            try:
                return int(text[2:], base)
            except ValueError:
                return None

    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def to_number(value: Any) -> Optional[Number]:
    """Coerce a JSON value to a finite number, or None when it is not numeric.

    Shared by the aggregation key and the type-aware sort so both agree on
    what counts as a number.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        return _parse_numeric_text(value)
    return None


def canonical_number(number: Number) -> str:
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def has_identifying_field(record: Any) -> bool:
    return isinstance(record, dict) and IDENTIFYING_FIELD in record


def identifying_key(record: Any) -> Optional[str]:
    """Merge key of a record: the string form of its numeric `data` value.

    Records whose `data` is missing, null or not numeric have no key.
    """
    if not has_identifying_field(record):
        return None
    number = to_number(record[IDENTIFYING_FIELD])
    if number is None:
        return None
    return canonical_number(number)


def display_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    try:
        return json.dumps(value, ensure_ascii=False, separators=(',', ':'))
    except (TypeError, ValueError):
        return str(value)
