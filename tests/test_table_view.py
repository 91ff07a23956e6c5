"""
tests/test_table_view.py
─────────────────────────
Tests for the search / filter / sort / paginate engine.
"""
from src.table import view
from src.table.columns import Column, FilterOption
from src.table.view import TableState


class TestSearch:
    def test_case_insensitive_substring(self, records, columns):
        lower = view.filter_records(records, columns, TableState(query="pump"))
        upper = view.filter_records(records, columns, TableState(query="PUMP"))
        assert len(lower) == 13
        assert lower == upper

    def test_only_searchable_columns(self, records, columns):
        # location is not searchable
        assert view.filter_records(records, columns, TableState(query="plant")) == []

    def test_matches_code(self, records, columns):
        found = view.filter_records(records, columns, TableState(query="eq-00"))
        assert [r["code"] for r in found] == [f"EQ-00{i}" for i in range(1, 10)]

    def test_hidden_column_not_searched(self, records, columns):
        state = TableState(query="pump", hidden_columns=["name"])
        assert view.filter_records(records, columns, state) == []

    def test_empty_query_keeps_everything(self, records, columns):
        assert len(view.filter_records(records, columns, TableState(query=""))) == 25


class TestFilters:
    def test_single_filter(self, records, columns):
        state = view.with_filter(TableState(), "location", "Plant B")
        assert len(view.filter_records(records, columns, state)) == 13

    def test_filters_are_conjunctive(self, records, columns):
        state = view.with_filter(TableState(), "location", "Plant B")
        state = view.with_filter(state, "status", "running")
        found = view.filter_records(records, columns, state)
        assert [r["id"] for r in found] == ["14", "15", "19", "20", "24", "25"]

    def test_all_sentinel_removes_filter(self):
        state = view.with_filter(TableState(), "status", "running")
        state = view.with_filter(state, "status", "all")
        assert state.filters == {}

    def test_empty_values_are_inactive(self):
        assert not view.is_active_filter(None)
        assert not view.is_active_filter("")
        assert not view.is_active_filter([])
        assert view.is_active_filter(0)
        assert view.is_active_filter(False)

    def test_list_filter_matches_any(self, records, columns):
        state = view.with_filter(TableState(), "status", ["failure", "maintenance"])
        found = view.filter_records(records, columns, state)
        assert {r["status"] for r in found} == {"failure", "maintenance"}
        assert len(found) == 10

    def test_filter_and_search_reset_page(self):
        state = TableState(page=3)
        assert view.with_filter(state, "status", "running").page == 1
        assert view.with_query(state, "x").page == 1


class TestSort:
    def test_cycle(self):
        state = view.toggle_sort(TableState(), "name")
        assert (state.sort_key, state.sort_direction) == ("name", "asc")
        state = view.toggle_sort(state, "name")
        assert state.sort_direction == "desc"
        state = view.toggle_sort(state, "name")
        assert state.sort_key is None and state.sort_direction is None

    def test_new_key_starts_ascending(self):
        state = view.toggle_sort(TableState(sort_key="name", sort_direction="desc"), "code")
        assert (state.sort_key, state.sort_direction) == ("code", "asc")

    def test_numbers_ascending_missing_last(self, records):
        rows = view.sort_records(records, TableState(sort_key="capacity", sort_direction="asc"))
        assert rows[0]["capacity"] == 10.0
        assert rows[-1]["capacity"] is None

    def test_descending_is_reverse_of_ascending(self, records):
        asc = view.sort_records(records, TableState(sort_key="capacity", sort_direction="asc"))
        desc = view.sort_records(records, TableState(sort_key="capacity", sort_direction="desc"))
        assert desc == list(reversed(asc))
        assert desc[0]["capacity"] is None
        assert desc[1]["capacity"] == 250.0

    def test_strings_case_insensitive(self):
        rows = [{"name": "beta"}, {"name": "Alpha"}, {"name": "alpha2"}]
        out = view.sort_records(rows, TableState(sort_key="name", sort_direction="asc"))
        assert [r["name"] for r in out] == ["Alpha", "alpha2", "beta"]

    def test_unsorted_keeps_insertion_order(self, records):
        assert view.sort_records(records, TableState()) == records


class TestPagination:
    def test_page_count(self):
        assert view.page_count(0, 10) == 1
        assert view.page_count(10, 10) == 1
        assert view.page_count(25, 10) == 3

    def test_last_page(self, records, columns):
        v = view.build_view(records, columns, TableState(page=3, page_size=10))
        assert len(v.rows) == 5
        assert (v.start, v.end) == (21, 25)
        assert v.rows == v.filtered[20:25]

    def test_go_to_page_clamps(self):
        assert view.go_to_page(TableState(page_size=10), 99, 25).page == 3
        assert view.go_to_page(TableState(page_size=10), 0, 25).page == 1

    def test_page_size_resets_page(self):
        state = view.with_page_size(TableState(page=3), 20)
        assert state.page == 1 and state.page_size == 20

    def test_out_of_range_page_is_clamped_in_view(self, records, columns):
        v = view.build_view(records, columns, TableState(page=9, page_size=10))
        assert v.page == 3

    def test_empty(self, columns):
        v = view.build_view([], columns, TableState())
        assert v.rows == []
        assert (v.start, v.end, v.page, v.page_count, v.total) == (0, 0, 1, 1, 0)


class TestViewProperties:
    def test_filtered_subset_and_counts(self, records, columns):
        state = view.with_filter(TableState(page_size=5), "location", "Plant A")
        v = view.build_view(records, columns, state)
        assert all(r in records for r in v.filtered)
        assert v.total == 25
        assert v.filtered_count == 12
        assert len(v.rows) <= state.page_size

    def test_records_not_mutated(self, records, columns):
        snapshot = [dict(r) for r in records]
        state = TableState(query="pump", sort_key="capacity", sort_direction="desc")
        view.build_view(records, columns, state)
        assert records == snapshot


class TestStateHelpers:
    def test_reset_keeps_page_size_and_hidden(self):
        state = TableState(query="x", filters={"status": "running"}, sort_key="name",
                           sort_direction="asc", page=2, page_size=50, hidden_columns=["code"])
        out = view.reset(state)
        assert out.query == "" and out.filters == {} and out.sort_key is None
        assert out.page == 1 and out.page_size == 50 and out.hidden_columns == ["code"]

    def test_toggle_column(self, columns):
        state = view.toggle_column(TableState(), "code")
        assert "code" not in [c.key for c in view.visible_columns(columns, state)]
        state = view.toggle_column(state, "code")
        assert state.hidden_columns == []

    def test_filter_options_distinct_first_seen(self, records, columns):
        location = columns[2]
        opts = view.filter_options(location, records)
        assert [o.value for o in opts] == ["Plant A", "Plant B"]

    def test_explicit_filter_options(self, records):
        column = Column(key="status", title="Status", filterable=True,
                        filter_options=(FilterOption("Running", "running"),))
        assert view.filter_options(column, records) == [FilterOption("Running", "running")]

    def test_state_round_trips_through_store(self):
        state = TableState(query="a", filters={"status": ["x"]}, page=2)
        assert TableState.model_validate(state.model_dump()) == state
