from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import gradio as gr
import pandas as pd

from .aggregation import aggregate_document
from .document import apply_edit, category_names, first_category, summarize_document
from .io_utils import (
    EXPORT_FILENAME,
    DocumentLoadError,
    export_text,
    fetch_json_document,
    read_json_content,
    write_export_file,
)
from .sorting import SortSpec, next_sort_spec
from .view import (
    MissingCategoryView,
    ScalarListView,
    TableView,
    build_view,
    header_labels,
)

logger = logging.getLogger(__name__)

DEFAULT_SORT = "(default)"


def _hidden():
    return gr.update(visible=False)


def render_view(document, category, query, spec):
    """Outputs: table, raw block, message, sort dropdown, row count."""
    spec = spec or SortSpec()
    view = build_view(document, category, query or "", spec)

    if isinstance(view, MissingCategoryView):
        return (
            _hidden(),
            _hidden(),
            gr.update(value=view.message, visible=True),
            gr.update(choices=[DEFAULT_SORT], value=DEFAULT_SORT, interactive=False),
            "",
        )

    if isinstance(view, ScalarListView):
        frame = pd.DataFrame(view.rows, columns=["index", "value"])
        return (
            gr.update(value=frame, visible=True),
            _hidden(),
            _hidden(),
            gr.update(choices=[DEFAULT_SORT], value=DEFAULT_SORT, interactive=False),
            f"Values: {len(view.rows)}",
        )

    if isinstance(view, TableView):
        frame = pd.DataFrame(view.rows, columns=header_labels(view.columns, spec))
        choices = [DEFAULT_SORT] + view.columns
        selected = spec.column if spec.column in view.columns else DEFAULT_SORT
        return (
            gr.update(value=frame, visible=True),
            _hidden(),
            _hidden(),
            gr.update(choices=choices, value=selected, interactive=True),
            f"Rows: {len(view.rows)} of {view.total}",
        )

    return (
        _hidden(),
        gr.update(value=view.text, visible=True),
        _hidden(),
        gr.update(choices=[DEFAULT_SORT], value=DEFAULT_SORT, interactive=False),
        "",
    )


def summary_text(document) -> str:
    summary = summarize_document(document)
    return (
        f"**Tag:** {summary.tag}  \n"
        f"**Timestamp:** {summary.timestamp}  \n"
        f"**Loaded keys:** {summary.key_count}"
    )


def document_outputs(document, category, query, spec, status, editor=None):
    """Outputs after the document itself changed.

    document, category radio, sort spec, status, summary, raw editor,
    followed by the `render_view` outputs.
    """
    names = category_names(document)
    if category not in names:
        category = first_category(document)
    if editor is None:
        editor = gr.update(value=export_text(document if document is not None else {}))
    return (
        document,
        gr.update(choices=names, value=category),
        spec,
        status,
        summary_text(document),
        editor,
    ) + render_view(document, category, query, spec)


def _install_loaded(current, category, query, spec, loader, source):
    try:
        document = loader()
    except DocumentLoadError as exc:
        logger.error(f"Failed to load JSON from {source}: {exc}")
        return document_outputs(current, category, query, spec, f"Failed to load JSON: {exc}", editor=gr.update())

    logger.info(f"Loaded {len(document)} categories from {source}")
    return document_outputs(
        document,
        first_category(document),
        query,
        SortSpec(),
        f"Successfully loaded. Found {len(document)} categories.",
    )


def load_document_from_file(file_obj, current, category, query, spec):
    if file_obj is None:
        return document_outputs(current, category, query, spec, "No file uploaded.", editor=gr.update())
    return _install_loaded(current, category, query, spec, lambda: read_json_content(file_obj), "upload")


def load_document_from_url(url, current, category, query, spec, timeout: float = 10.0):
    url = (url or "").strip()
    if not url:
        return document_outputs(current, category, query, spec, "Enter a URL to load.", editor=gr.update())
    return _install_loaded(current, category, query, spec, lambda: fetch_json_document(url, timeout), url)


def initial_load(source_path: Optional[str] = None, source_url: Optional[str] = None, timeout: float = 10.0):
    """Document shown when the page opens, from config."""
    if source_path:
        return _install_loaded(None, None, "", SortSpec(), lambda: read_json_content(source_path), source_path)
    if source_url:
        return _install_loaded(None, None, "", SortSpec(), lambda: fetch_json_document(source_url, timeout), source_url)
    return document_outputs(None, None, "", SortSpec(), "No document loaded.")


def select_category(document, category, query):
    """Switching category resets the sort."""
    spec = SortSpec()
    return (spec,) + render_view(document, category, query, spec)


def update_search(document, category, query, spec):
    return render_view(document, category, query, spec)


def choose_sort_column(document, category, query, spec, column):
    column = None if column in (None, DEFAULT_SORT) else column
    new_spec = next_sort_spec(spec, column)
    return (new_spec,) + render_view(document, category, query, new_spec)


def flip_sort_direction(document, category, query, spec):
    spec = spec or SortSpec()
    if spec.column is None:
        return (spec,) + render_view(document, category, query, spec)
    new_spec = next_sort_spec(spec, spec.column)
    return (new_spec,) + render_view(document, category, query, new_spec)


def sort_by_selected_cell(document, category, query, spec, evt: gr.SelectData):
    """Clicking a table cell sorts by that cell's column, again to reverse."""
    view = build_view(document, category, query or "", spec)
    if not isinstance(view, TableView) or evt is None:
        return (spec,) + render_view(document, category, query, spec)

    index = evt.index
    col_idx = index[1] if isinstance(index, (list, tuple)) else index
    if not isinstance(col_idx, int) or not 0 <= col_idx < len(view.columns):
        return (spec,) + render_view(document, category, query, spec)

    new_spec = next_sort_spec(spec, view.columns[col_idx])
    return (new_spec,) + render_view(document, category, query, new_spec)


def aggregate_all(document, category, query, spec):
    if document is None:
        return document_outputs(document, category, query, spec, "No data loaded.", editor=gr.update())
    aggregated = aggregate_document(document)
    return document_outputs(aggregated, category, query, spec, "Aggregated duplicate records.")


def apply_raw_edit(document, text, category, query, spec):
    """Replace the document from the raw editor; invalid JSON keeps the current one."""
    updated, error = apply_edit(document, text)
    if error is not None:
        return document_outputs(document, category, query, spec, f"Edit rejected: {error}", editor=gr.update())
    return document_outputs(updated, category, query, spec, "Edits applied.", editor=gr.update())


def download_document(document: Optional[Dict[str, Any]], export_filename: str = EXPORT_FILENAME):
    if document is None:
        return None, "No data loaded."
    try:
        path = write_export_file(document, export_filename)
    except OSError as exc:
        logger.error(f"Export failed: {exc}")
        return None, f"Error writing file: {exc}"
    return path, f"Export successful! Saved to {path}"
