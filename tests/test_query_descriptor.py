from datetime import date

import pytest

from record_console.engine.pipeline import run_pipeline
from record_console.models.records import ListConfig
from record_console.models.query import (
    ASC,
    DEFAULT_PAGE_SIZE,
    DESC,
    DateRange,
    QueryDescriptor,
    SortSpec,
)


def test_defaults():
    query = QueryDescriptor()
    assert query.page_index == 1
    assert query.page_size == DEFAULT_PAGE_SIZE
    assert not query.sort.active
    assert query.search_text == ""
    assert query.filters == {}
    assert query.date_range is None


def test_malformed_values_are_coerced():
    query = QueryDescriptor(page_index=0, page_size="abc", search_text=None)
    assert query.page_index == 1
    assert query.page_size == DEFAULT_PAGE_SIZE
    assert query.search_text == ""
    assert SortSpec(key="name", order="sideways").active is False


def test_result_changing_mutators_reset_page():
    query = QueryDescriptor(page_index=4)
    query.set_search_text("acme")
    assert query.page_index == 1

    query.set_page_index(3)
    query.set_filter("status", ["Won"])
    assert query.page_index == 1

    query.set_page_index(3)
    query.set_date_range(date(2024, 1, 1), None)
    assert query.page_index == 1

    query.set_page_index(3)
    query.set_page_size(25)
    assert (query.page_index, query.page_size) == (1, 25)

    query.set_page_index(3)
    query.clear_filters()
    assert query.page_index == 1
    assert query.filters == {} and query.search_text == "" and query.date_range is None


def test_sorting_keeps_page():
    query = QueryDescriptor(page_index=3)
    query.set_sort("name", DESC)
    assert query.page_index == 3
    assert query.sort == SortSpec("name", DESC)


def test_toggle_sort_cycles():
    query = QueryDescriptor()
    query.toggle_sort("name")
    assert query.sort == SortSpec("name", ASC)
    query.toggle_sort("name")
    assert query.sort == SortSpec("name", DESC)
    query.toggle_sort("name")
    assert not query.sort.active
    query.toggle_sort("name")
    query.toggle_sort("value")
    assert query.sort == SortSpec("value", ASC)


def test_empty_filter_removes_field():
    query = QueryDescriptor(filters={"status": ["Won"]})
    query.set_filter("status", [])
    assert "status" not in query.filters
    query.set_filters({"status": ["New"], "source": []})
    assert query.filters == {"status": ["New"]}
    assert query.active_filters == {"status": ["New"]}


def test_clamp():
    query = QueryDescriptor(page_index=5, page_size=10)
    assert query.clamp(23) is True
    assert query.page_index == 3
    assert query.clamp(23) is False
    assert query.clamp(0) is True
    assert query.page_index == 1


def test_offset():
    assert QueryDescriptor(page_index=3, page_size=10).offset == 20


def test_dict_round_trip():
    query = QueryDescriptor(
        page_index=2,
        page_size=25,
        sort=SortSpec("created_at", DESC),
        search_text="acme",
        filters={"status": ["Won", "New"]},
        date_range=DateRange(date(2024, 1, 1), date(2024, 1, 31)),
    )
    restored = QueryDescriptor.from_dict(query.to_dict())
    assert restored == query
    assert restored.fingerprint() == query.fingerprint()


def test_from_dict_tolerates_garbage():
    restored = QueryDescriptor.from_dict(
        {
            "page_index": "x",
            "page_size": -4,
            "sort": "name",
            "filters": {"status": "Won", "source": ["Web"]},
            "date_range": ["bad", None],
        }
    )
    assert restored.page_index == 1
    assert restored.page_size == 1
    assert not restored.sort.active
    assert restored.filters == {"source": ["Web"]}
    assert restored.date_range is None
    assert QueryDescriptor.from_dict(None) == QueryDescriptor()


@pytest.mark.parametrize(
    "data",
    [
        {"sort": {"key": 5, "order": "asc"}},
        {"sort": {"key": ["a"], "order": "asc"}},
        {"page_index": float("inf"), "page_size": float("nan")},
        {"filters": {5: ["x"], "status": ["Won"]}},
    ],
)
def test_from_dict_garbage_never_reaches_the_pipeline(data):
    records = [{"id": 1, "status": "Won"}, {"id": 2, "status": "New"}]
    query = QueryDescriptor.from_dict(data)
    result = run_pipeline(records, query, ListConfig())
    assert query.page_index >= 1 and query.page_size >= 1
    assert all(isinstance(key, str) for key in query.filters)
    assert query.sort.key is None or isinstance(query.sort.key, str)
    assert result.total in (1, 2)


def test_toggle_filter_value():
    query = QueryDescriptor(page_index=3)
    query.toggle_filter_value("status", "Won", True)
    query.toggle_filter_value("status", "New", True)
    query.toggle_filter_value("status", "Won", True)
    assert query.filters == {"status": ["New", "Won"]}
    assert query.page_index == 1
    query.toggle_filter_value("status", "New", False)
    query.toggle_filter_value("status", "Won", False)
    assert query.filters == {}


def test_fingerprint_changes_with_query():
    query = QueryDescriptor()
    before = query.fingerprint()
    query.set_search_text("acme")
    assert query.fingerprint() != before
    assert '"search_text": "acme"' in query.to_json()
