from record_console.engine.list_view import ListView
from record_console.models.query import DESC, QueryDescriptor
from record_console.models.records import ListConfig


def page_ids(view):
    return [record["id"] for record in view.page_data]


def numbered(count):
    return [{"id": index, "name": f"Record {index:02d}"} for index in range(1, count + 1)]


def test_selection_survives_page_size_change(view):
    view.set_page_size(1)
    view.toggle_row(1, True)
    view.set_page_size(2)
    assert page_ids(view) == [1, 2]
    assert view.is_selected(1) is True
    assert view.is_selected(2) is False


def test_selection_survives_paging_and_accumulates_across_pages():
    view = ListView(ListConfig(), QueryDescriptor(page_size=2), records=numbered(5))
    view.toggle_row(1, True)
    view.set_page_index(2)
    view.toggle_visible(True)
    view.set_page_index(1)
    assert view.is_selected(1)
    assert view.selection.selected == {1, 3, 4}
    view.set_sort("name", DESC)
    assert view.selection.count == 3


def test_all_visible_selected():
    view = ListView(ListConfig(), QueryDescriptor(page_size=2), records=numbered(3))
    view.toggle_visible(True)
    assert view.all_visible_selected
    view.set_page_index(2)
    assert not view.all_visible_selected
    view.toggle_visible(False)
    assert view.selection.selected == {1, 2}


def test_page_is_clamped_when_results_shrink():
    view = ListView(ListConfig(), QueryDescriptor(page_size=2), records=numbered(6))
    view.set_page_index(3)
    assert page_ids(view) == [5, 6]

    view.set_records(numbered(3))
    assert view.query.page_index == 2
    assert page_ids(view) == [3]

    view.set_records([])
    assert view.query.page_index == 1
    assert view.total == 0


def test_paging_past_the_end_lands_on_last_page():
    view = ListView(ListConfig(), QueryDescriptor(page_size=2), records=numbered(3))
    view.set_page_index(10)
    assert view.query.page_index == 2


def test_reload_reconciles_selection(view):
    view.toggle_row(1, True)
    view.toggle_row(2, True)
    view.set_records([{"id": 2, "status": "Won", "createdAt": "2024-02-01"}])
    assert view.selection.selected == {2}


def test_records_are_copied():
    records = numbered(2)
    view = ListView(ListConfig(), records=records)
    records[0]["name"] = "changed"
    assert view.records[0]["name"] == "Record 01"


def test_stale_reload_is_ignored():
    view = ListView(ListConfig(), records=numbered(1))
    first = view.begin_reload()
    second = view.begin_reload()
    assert view.apply_reload(second, numbered(3)) is True
    assert view.apply_reload(first, numbered(9)) is False
    assert view.total == 3


def test_distinct_values_come_from_loaded_records(view):
    view.set_filter("status", ["Won"])
    assert view.distinct_values("status") == ["New", "Won"]


def test_selected_records(view):
    view.toggle_row(2, True)
    assert [record["id"] for record in view.selected_records()] == [2]


def test_reset_keeps_page_size():
    view = ListView(ListConfig(), QueryDescriptor(page_size=2), records=numbered(5))
    view.set_search_text("record")
    view.toggle_row(1, True)
    view.reset()
    assert view.query == QueryDescriptor(page_size=2)
    assert view.selection.count == 0


def test_state_round_trip():
    view = ListView(ListConfig(), QueryDescriptor(page_size=2), records=numbered(5))
    view.set_page_index(2)
    view.toggle_row(4, True)
    restored = ListView.from_dict(ListConfig(), view.to_dict(), numbered(5))
    assert restored.query == view.query
    assert restored.selection.selected == {4}
    assert page_ids(restored) == [3, 4]


def test_is_stale():
    view = ListView(ListConfig())
    first = view.begin_reload()
    assert not view.is_stale(first)
    view.begin_reload()
    assert view.is_stale(first)


def test_filter_values_are_ored_within_a_field():
    records = [
        {"id": 1, "status": "New"},
        {"id": 2, "status": "Won"},
        {"id": 3, "status": "Lost"},
    ]
    view = ListView(ListConfig(), records=records)
    view.toggle_filter_value("status", "New", True)
    view.toggle_filter_value("status", "Lost", True)
    assert page_ids(view) == [1, 3]

    view.toggle_filter_value("status", "New", False)
    assert page_ids(view) == [3]

    view.toggle_filter_value("status", "Lost", False)
    assert view.query.filters == {}
    assert view.total == 3
