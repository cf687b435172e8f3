from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "arranged.json"
EXPORT_MIME_TYPE = "application/json"


class DocumentLoadError(ValueError):
    """The source could not be turned into a JSON document."""


def parse_document_text(text) -> Dict[str, Any]:
    """Parse raw JSON text into a document (a JSON object)."""
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise DocumentLoadError(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise DocumentLoadError(f"Expected a JSON object at the top level, got {type(data).__name__}.")
    return data


def read_json_content(file_obj) -> Dict[str, Any]:
    """Read a document from an uploaded file or file path."""
    if file_obj is None:
        raise DocumentLoadError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        return parse_document_text(file_obj.read())

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
    except OSError as exc:
        raise DocumentLoadError(f"Cannot read {path}: {exc}") from exc
    return parse_document_text(content)


def fetch_json_document(url: str, timeout: float = 10.0, client: Optional[httpx.Client] = None) -> Dict[str, Any]:
    """GET a document over HTTP, bypassing caches. No retries."""
    headers = {"Cache-Control": "no-cache", "Accept": "application/json"}
    try:
        if client is not None:
            response = client.get(url, headers=headers, timeout=timeout)
        else:
            response = httpx.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise DocumentLoadError(f"HTTP {exc.response.status_code} from {url}") from exc
    except httpx.HTTPError as exc:
        raise DocumentLoadError(f"Request to {url} failed: {exc}") from exc

    return parse_document_text(response.content)


def export_text(document: Any) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def write_export_file(document: Any, file_name: Optional[str] = None, directory: Optional[str] = None) -> str:
    """Write the pretty-printed document and return the file path."""
    output_name = (file_name or EXPORT_FILENAME).strip() or EXPORT_FILENAME
    if not output_name.lower().endswith('.json'):
        output_name += '.json'

    path = os.path.join(directory or tempfile.gettempdir(), output_name)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(export_text(document))

    logger.info(f"Exported document to {path}")
    return path
