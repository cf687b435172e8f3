"""Tests for the view coordinator."""

import json

from json_arranger.sorting import DESCENDING, SortSpec
from json_arranger.view import (
    MissingCategoryView,
    RawView,
    ScalarListView,
    TableView,
    build_view,
    header_labels,
)


class TestBuildView:
    """Tests for build_view()."""

    def test_missing_key(self, sample_document):
        view = build_view(sample_document, "nope")
        assert isinstance(view, MissingCategoryView)
        assert view.message == "Key not present"

    def test_no_category_selected(self, sample_document):
        view = build_view(sample_document, None)
        assert isinstance(view, MissingCategoryView)
        assert view.message == "No category selected"

    def test_no_document(self):
        assert isinstance(build_view(None, "troops"), MissingCategoryView)

    def test_scalar_list(self, sample_document):
        view = build_view(sample_document, "achievements", query="first", spec=SortSpec("value", DESCENDING))
        assert isinstance(view, ScalarListView)
        assert view.rows == [(0, "first"), (1, "second"), (2, "3"), (3, "null")]

    def test_opaque(self, sample_document):
        view = build_view(sample_document, "settings")
        assert isinstance(view, RawView)
        assert view.text == json.dumps({"theme": "dark"}, indent=2)

    def test_scalar_top_level_value_is_raw(self, sample_document):
        view = build_view(sample_document, "tag")
        assert isinstance(view, RawView)
        assert view.text == '"clan-42"'

    def test_table_default_order(self, sample_document):
        view = build_view(sample_document, "troops")
        assert isinstance(view, TableView)
        assert view.columns == ["data", "name", "cnt", "lvl", "timer", "helper_recurrent", "extra"]
        assert [row[0] for row in view.rows] == ["", "1", "1", "3", "3"]
        assert view.total == 5

    def test_table_filter_then_project(self, sample_document):
        view = build_view(sample_document, "troops", query="goblin")
        assert view.columns == ["data", "name", "cnt", "lvl", "timer", "helper_recurrent"]
        assert [row[1] for row in view.rows] == ["Goblin", "Goblin King"]
        assert view.rows[0] == ["3", "Goblin", "2", "1", "100", ""]

    def test_table_sorted_by_column(self, sample_document):
        view = build_view(sample_document, "troops", spec=SortSpec("cnt", DESCENDING))
        assert [row[2] for row in view.rows] == ["4", "2", "2", "1", ""]
        assert view.spec == SortSpec("cnt", DESCENDING)

    def test_nested_cells(self, sample_document):
        view = build_view(sample_document, "troops", query="tier")
        extra = view.columns.index("extra")
        assert view.rows[0][extra] == '{"tier":2}'

    def test_non_record_entries_render_empty(self):
        view = build_view({"mixed": [{"a": 1}, 7]}, "mixed")
        assert view.columns == ["a"]
        assert view.rows == [["1"], [""]]

    def test_text_sort_with_null_character(self):
        document = json.loads('{"t": [{"name": "c"}, {"name": "a\\u0000b"}]}')
        view = build_view(document, "t", "", SortSpec("name"))
        assert [row[0] for row in view.rows] == ["a\x00b", "c"]

    def test_pure(self, sample_document):
        first = build_view(sample_document, "troops", "gob", SortSpec("lvl"))
        second = build_view(sample_document, "troops", "gob", SortSpec("lvl"))
        assert first == second


class TestHeaderLabels:
    """Tests for header_labels()."""

    def test_marks_active_column(self):
        assert header_labels(["data", "cnt"], SortSpec("cnt")) == ["data", "cnt ▲"]
        assert header_labels(["data", "cnt"], SortSpec("cnt", DESCENDING)) == ["data", "cnt ▼"]

    def test_default_spec_leaves_labels(self):
        assert header_labels(["data", "cnt"], SortSpec()) == ["data", "cnt"]
