from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .io_utils import DocumentLoadError, parse_document_text

logger = logging.getLogger(__name__)

PLACEHOLDER = "—"


@dataclass(frozen=True)
class DocumentSummary:
    tag: str
    timestamp: str
    key_count: int


def category_names(document: Optional[Dict[str, Any]]) -> List[str]:
    if not isinstance(document, dict):
        return []
    return list(document.keys())


def first_category(document: Optional[Dict[str, Any]]) -> Optional[str]:
    names = category_names(document)
    return names[0] if names else None


def apply_edit(current: Optional[Dict[str, Any]], text: str) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """Replace the document with the parsed `text`.

    On invalid input the current document is returned untouched together with
    the error message; this never raises.
    """
    try:
        document = parse_document_text(text)
    except DocumentLoadError as exc:
        logger.warning(f"Rejected edit: {exc}")
        return current, str(exc)
    return document, None


def _summary_field(document: Dict[str, Any], key: str) -> str:
    value = document.get(key)
    if value is None:
        return PLACEHOLDER
    return str(value)


def summarize_document(document: Optional[Dict[str, Any]]) -> DocumentSummary:
    if not isinstance(document, dict):
        return DocumentSummary(PLACEHOLDER, PLACEHOLDER, 0)
    return DocumentSummary(
        tag=_summary_field(document, 'tag'),
        timestamp=_summary_field(document, 'timestamp'),
        key_count=len(document),
    )
