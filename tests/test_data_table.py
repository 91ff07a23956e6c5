"""
tests/test_data_table.py
─────────────────────────
Tests for the DataTable component model.
"""
import io

import pandas as pd
import pytest

from src.crud.schemas import SOURCES
from src.layout.components.data_table import dt_id, filter_dropdown_options, render_body, render_header, render_selection
from src.table.columns import RowAction
from src.table.data_table import DataTable, TableSummary


class TestConfiguration:
    def test_defaults(self, table):
        assert table.searchable and table.filterable and table.exportable
        assert table.importable
        assert table.state.page == 1
        assert [c.key for c in table.filterable_columns] == ["location", "status"]

    def test_importable_needs_import_columns(self, records, columns):
        assert not DataTable("t", columns, records, importable=True).importable

    def test_default_export_columns_follow_visible_columns(self, records, columns):
        t = DataTable("t", columns, records)
        assert [c.key for c in t.export_columns] == [c.key for c in columns]

    def test_unknown_column(self, table):
        with pytest.raises(KeyError):
            table.column("nope")
        with pytest.raises(KeyError):
            table.set_filter("nope", "x")


class TestStateTransitions:
    def test_summary(self, table):
        assert table.summary == TableSummary(total=25, filtered=25, start=1, end=10)

    def test_search_then_page(self, table):
        table.next_page()
        assert table.view.page == 2
        table.search("pump")
        assert table.view.page == 1
        assert table.summary.filtered == 13

    def test_page_navigation_is_clamped(self, table):
        table.previous_page()
        assert table.view.page == 1
        table.go_to_page(3)
        table.next_page()
        assert table.view.page == 3
        assert len(table.rows) == 5

    def test_set_page_size(self, table):
        table.go_to_page(2)
        table.set_page_size(20)
        assert table.state.page == 1
        assert table.view.page_count == 2

    def test_unsupported_page_size(self, table):
        with pytest.raises(ValueError):
            table.set_page_size(7)

    def test_non_sortable_column_ignored(self, table):
        table.toggle_sort("location")
        assert table.state.sort_key is None

    def test_sort_and_reset(self, table):
        table.toggle_sort("capacity")
        table.toggle_sort("capacity")
        assert table.rows[0]["capacity"] is None
        table.set_filter("location", "Plant A")
        table.reset()
        assert table.summary.filtered == 25
        assert table.state.sort_key is None

    def test_third_sort_toggle_restores_order(self, table, records):
        for _ in range(3):
            table.toggle_sort("capacity")
        assert table.rows == records[:10]

    def test_clear_filter(self, table):
        table.set_filter("status", "stopped")
        assert table.summary.filtered == 5
        table.clear_filter("status")
        assert table.summary.filtered == 25

    def test_toggle_column(self, table):
        table.toggle_column("capacity")
        assert "capacity" not in [c.key for c in table.visible_columns]

    def test_bind_leaves_original_untouched(self, table, records):
        bound = table.bind(records[:3])
        bound.search("pump")
        assert bound.summary.total == 3
        assert table.state.query == ""
        assert table.summary.total == 25

    def test_data_not_mutated(self, table, records):
        snapshot = [dict(r) for r in records]
        table.toggle_sort("name")
        table.search("compressor")
        _ = table.rows
        assert table.data == snapshot


class TestActions:
    def test_hidden_and_disabled(self, records, columns):
        calls = []
        actions = [
            RowAction(key="edit", label="edit", on_click=calls.append),
            RowAction(key="delete", label="delete", variant="destructive", on_click=calls.append,
                      disabled=lambda r: r["status"] == "running"),
            RowAction(key="repair", label="repair", on_click=calls.append,
                      hidden=lambda r: r["status"] != "failure"),
        ]
        t = DataTable("t", columns, records, actions=actions)
        running = records[3]   # id 4
        failed = records[2]    # id 3

        assert [a.key for a in t.actions_for(running)] == ["edit", "delete"]
        assert [a.key for a in t.actions_for(failed)] == ["edit", "delete", "repair"]

        assert t.invoke("delete", running) is None
        assert t.invoke("repair", running) is None
        t.invoke("edit", running)
        t.invoke("delete", failed)
        assert calls == [running, failed]

    def test_unknown_action(self, table, records):
        with pytest.raises(KeyError):
            table.invoke("nope", records[0])

    def test_add_delegates(self, records, columns):
        hits = []
        t = DataTable("t", columns, records, on_add=lambda: hits.append(1))
        t.add()
        assert hits == [1]
        assert DataTable("t", columns, records).add() is None


class TestFiles:
    def test_export_uses_filtered_rows(self, table):
        table.set_filter("location", "Plant A")
        frame = pd.read_csv(io.BytesIO(table.export("csv")), encoding="utf-8-sig")
        assert list(frame.columns) == ["Code", "Name", "Location", "Status", "Capacity"]
        assert len(frame) == 12

    def test_template_has_import_headers(self, table):
        frame = pd.read_excel(io.BytesIO(table.create_template("xlsx")), engine="openpyxl")
        assert list(frame.columns) == ["Code", "Name", "Capacity", "Qty", "Install date", "Active", "Status"]
        assert frame.empty

    def test_import_without_columns(self, records, columns):
        with pytest.raises(ValueError):
            DataTable("t", columns, records).import_file(b"Code\nx\n", "a.csv")

    def test_import_calls_on_import(self, records, columns, import_columns):
        received = []
        t = DataTable("t", columns, records, import_columns=import_columns, on_import=received.append)
        result = t.import_file(b"Code,Name\nEQ-1,Pump\n", "a.csv")
        assert result.summary.success == 1
        assert received == [[{"code": "EQ-1", "name": "Pump"}]]


@pytest.fixture
def selectable(records, columns):
    return DataTable("t", columns, records, selectable=True)


class TestSelection:
    def test_select_and_unselect_row(self, selectable, records):
        selectable.select_row("3")
        selectable.select_row("1")
        assert [r["id"] for r in selectable.selected_rows] == ["3", "1"]
        selectable.select_row("3", False)
        assert selectable.state.selected == ["1"]
        assert records[2] not in selectable.selected_rows

    def test_select_page(self, selectable):
        selectable.select_page()
        assert selectable.state.selected == [str(i) for i in range(1, 11)]
        assert selectable.all_selected
        selectable.next_page()
        assert not selectable.all_selected
        assert not selectable.some_selected

    def test_partial_page(self, selectable):
        selectable.select_row("2")
        assert selectable.some_selected
        assert not selectable.all_selected

    def test_clear_selection(self, selectable):
        selectable.select_page()
        selectable.clear_selection()
        assert selectable.selected_rows == []

    def test_on_select_receives_rows(self, records, columns):
        received = []
        t = DataTable("t", columns, records, selectable=True, on_select=received.append)
        t.select_row("5")
        t.clear_selection()
        assert [[r["id"] for r in rows] for rows in received] == [["5"], []]

    def test_survives_search_and_reset(self, selectable):
        selectable.select_row("4")
        selectable.search("pump")
        selectable.reset()
        assert selectable.state.selected == ["4"]

    def test_removed_records_drop_out(self, selectable, records):
        selectable.select_row("1")
        selectable.select_row("2")
        rebound = selectable.bind(records[1:], selectable.state)
        assert [r["id"] for r in rebound.selected_rows] == ["2"]


class TestSelectionRendering:
    def test_checkbox_column(self, selectable):
        selectable.select_row("1")
        header = render_header(selectable, "en").children.children
        assert header[0].children.id == dt_id("select-all", "t")
        assert header[0].children.value is False
        first = render_body(selectable, "en").children[0]
        assert first.children[0].children.id == dt_id("select", "t", row="1")
        assert first.children[0].children.value is True
        assert first.className == "dt-selected"

    def test_no_checkboxes_unless_selectable(self, table):
        header = render_header(table, "en").children.children
        assert len(header) == len(table.visible_columns)

    def test_selection_bar(self, selectable):
        text, style = render_selection(selectable, "en")
        assert style["display"] == "none"
        selectable.select_row("1")
        selectable.select_row("2")
        text, style = render_selection(selectable, "en")
        assert text == "2 selected"
        assert style["display"] == "flex"


class TestFilterDropdowns:
    def test_options_from_bound_records(self, table):
        options = filter_dropdown_options(table, "location", "en")
        assert [o["value"] for o in options] == ["all", "Plant A", "Plant B"]

    def test_unbound_table_has_only_all(self, columns):
        options = filter_dropdown_options(DataTable("t", columns), "location", "en")
        assert options == [{"label": "All", "value": "all"}]

    def test_store_records_fill_entity_filters(self):
        import src.callbacks.entities  # noqa: F401  registers the entity tables
        from src.callbacks.data_table import filter_dropdowns

        types, locations = filter_dropdowns("sources", ["type", "location"], SOURCES.initial(), "en")
        assert [o["value"] for o in types] == ["all", "설비", "공정"]
        assert [o["label"] for o in types] == ["All", "Equipment", "Process"]
        assert len(locations) == 4

    def test_store_change_updates_options(self):
        import src.callbacks.entities  # noqa: F401
        from src.callbacks.data_table import filter_dropdowns

        records = [*SOURCES.initial(), {"id": "9", "name": "Truck", "type": "차량", "location": "Yard"}]
        (types,) = filter_dropdowns("sources", ["type"], records, "en")
        assert "차량" in [o["value"] for o in types]
        assert filter_dropdowns("sources", ["type"], [], "en") == [[{"label": "All", "value": "all"}]]
