from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from .columns import build_rows, project_columns
from .filtering import filter_records
from .records import CategoryKind, classify, display_value
from .sorting import ASCENDING, SortSpec, sort_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MissingCategoryView:
    category: Optional[str]

    @property
    def message(self) -> str:
        if self.category is None:
            return "No category selected"
        return "Key not present"


@dataclass(frozen=True)
class ScalarListView:
    rows: List[Tuple[int, str]]


@dataclass(frozen=True)
class TableView:
    columns: List[str]
    rows: List[List[str]]
    total: int = 0
    spec: SortSpec = field(default_factory=SortSpec)


@dataclass(frozen=True)
class RawView:
    text: str


View = Union[MissingCategoryView, ScalarListView, TableView, RawView]


def header_labels(columns: List[str], spec: Optional[SortSpec]) -> List[str]:
    """Column labels with an arrow on the active sort column."""
    if spec is None or spec.column is None:
        return list(columns)
    arrow = "▲" if spec.direction == ASCENDING else "▼"
    return [f"{col} {arrow}" if col == spec.column else col for col in columns]


def _as_record(entry: Any) -> Dict[str, Any]:
    return entry if isinstance(entry, dict) else {}


def build_table(records: List[Any], query: str = '', spec: Optional[SortSpec] = None) -> TableView:
    spec = spec or SortSpec()
    rows = [_as_record(r) for r in records]
    rows = filter_records(rows, query)
    # columns follow input order of the filtered set, so sorting never reorders them
    columns = project_columns(rows)
    rows = sort_records(rows, spec)
    return TableView(columns=columns, rows=build_rows(rows, columns), total=len(records), spec=spec)


def build_view(
    document: Optional[Dict[str, Any]],
    category: Optional[str],
    query: str = '',
    spec: Optional[SortSpec] = None,
) -> View:
    """Render state for one category, recomputed from scratch on every call."""
    if category is None or not isinstance(document, dict) or category not in document:
        return MissingCategoryView(category)

    value = document[category]
    kind = classify(value)
    logger.debug(f"Building {kind.value} view for '{category}'")

    if kind is CategoryKind.SCALAR_LIST:
        return ScalarListView([(i, display_value(v)) for i, v in enumerate(value)])
    if kind is CategoryKind.RECORD_LIST:
        return build_table(value, query, spec)
    return RawView(json.dumps(value, indent=2, ensure_ascii=False))
