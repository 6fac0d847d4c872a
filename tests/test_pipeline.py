import math
from datetime import date

import pytest

from record_console.engine.pipeline import (
    distinct_values,
    filter_date_range,
    run_pipeline,
    sort_records,
)
from record_console.models.query import ASC, DESC, DateRange, QueryDescriptor, SortSpec
from record_console.models.records import ListConfig


def ids(records):
    return [record["id"] for record in records]


def test_field_filter(two_records):
    query = QueryDescriptor(filters={"status": ["Won"]})
    result = run_pipeline(two_records, query, ListConfig())
    assert result.total == 1
    assert ids(result.page_data) == [2]


def test_sort_and_paginate(two_records):
    query = QueryDescriptor(page_size=1, sort=SortSpec("createdAt", DESC))
    first = run_pipeline(two_records, query, ListConfig())
    query.set_page_index(2)
    second = run_pipeline(two_records, query, ListConfig())
    assert ids(first.page_data) == [2]
    assert ids(second.page_data) == [1]
    assert first.total == second.total == 2
    assert first.has_more and not second.has_more


def test_pipeline_is_idempotent_and_pure(leads, lead_config):
    query = QueryDescriptor(
        page_size=2,
        sort=SortSpec("value", DESC),
        search_text="a",
        filters={"status": ["New", "Won"]},
    )
    snapshot = [dict(record) for record in leads]
    first = run_pipeline(leads, query, lead_config)
    second = run_pipeline(leads, query, lead_config)
    assert first == second
    assert leads == snapshot


@pytest.mark.parametrize(
    "narrow",
    [
        lambda q: q.set_filter("status", ["Won"]),
        lambda q: q.set_search_text("dana"),
        lambda q: q.set_date_range(date(2024, 1, 1), date(2024, 1, 31)),
    ],
)
def test_adding_constraints_never_increases_total(leads, lead_config, narrow):
    query = QueryDescriptor(filters={"status": ["New", "Won", "Lost"]})
    before = run_pipeline(leads, query, lead_config).total
    narrow(query)
    assert run_pipeline(leads, query, lead_config).total <= before


@pytest.mark.parametrize("page_size", [1, 2, 3, 10])
def test_pages_cover_the_result_exactly(leads, lead_config, page_size):
    query = QueryDescriptor(page_size=page_size, sort=SortSpec("name", ASC))
    full = run_pipeline(leads, query, lead_config)
    pages = []
    for page_index in range(1, math.ceil(full.total / page_size) + 1):
        query.set_page_index(page_index)
        pages.extend(run_pipeline(leads, query, lead_config).page_data)
    assert pages == full.all_filtered_and_sorted
    assert len({record["id"] for record in pages}) == full.total


def test_sort_is_stable_in_both_directions():
    records = [
        {"id": 1, "score": 5},
        {"id": 2, "score": 3},
        {"id": 3, "score": 5},
        {"id": 4, "score": 3},
    ]
    assert ids(sort_records(records, SortSpec("score", ASC))) == [2, 4, 1, 3]
    assert ids(sort_records(records, SortSpec("score", DESC))) == [1, 3, 2, 4]


def test_missing_values_sort_like_empty_string(leads, lead_config):
    asc = run_pipeline(leads, QueryDescriptor(sort=SortSpec("value", ASC)), lead_config)
    desc = run_pipeline(leads, QueryDescriptor(sort=SortSpec("value", DESC)), lead_config)
    assert ids(asc.all_filtered_and_sorted) == [3, 2, 5, 1, 4]
    assert ids(desc.all_filtered_and_sorted) == [4, 1, 2, 5, 3]


def test_numbers_sort_numerically_without_configuration():
    records = [{"id": 1, "n": 10}, {"id": 2, "n": 9}, {"id": 3, "n": 100}]
    assert ids(sort_records(records, SortSpec("n", ASC))) == [2, 1, 3]


def test_search_is_case_insensitive_and_covers_nested_and_list_fields(
    leads, lead_config
):
    def search(text):
        query = QueryDescriptor(search_text=text)
        return ids(run_pipeline(leads, query, lead_config).all_filtered_and_sorted)

    assert search("GLOBEX") == [2]
    assert search("dana") == [1, 4]
    assert search("pilot") == [3]
    assert search("  ") == [1, 2, 3, 4, 5]


def test_search_without_configured_fields_scans_top_level_values(leads):
    query = QueryDescriptor(search_text="hooli")
    assert ids(run_pipeline(leads, query, ListConfig()).page_data) == [5]


def test_filter_on_dotted_path_and_list_field(leads, lead_config):
    query = QueryDescriptor(filters={"owner.name": ["Dana"]})
    assert ids(run_pipeline(leads, query, lead_config).page_data) == [1, 4]
    query = QueryDescriptor(filters={"tags": ["enterprise"]})
    assert ids(run_pipeline(leads, query, lead_config).page_data) == [1, 4]


def test_filters_and_across_fields_or_within_field(leads, lead_config):
    query = QueryDescriptor(filters={"status": ["New", "Won"], "owner.name": ["Dana"]})
    assert ids(run_pipeline(leads, query, lead_config).page_data) == [1, 4]


def test_filter_values_match_by_text():
    records = [{"id": 1, "level": 3}, {"id": 2, "level": 4}]
    query = QueryDescriptor(filters={"level": ["3"]})
    assert ids(run_pipeline(records, query, ListConfig()).page_data) == [1]


def test_date_range_is_inclusive_by_whole_day(leads):
    kept = filter_date_range(
        leads, DateRange(date(2024, 1, 5), date(2024, 1, 31)), "created_at"
    )
    assert ids(kept) == [1, 2]


def test_date_range_drops_missing_and_unparseable_timestamps(leads):
    kept = filter_date_range(leads, DateRange(start=date(2000, 1, 1)), "created_at")
    assert ids(kept) == [1, 2, 3]


def test_inactive_date_range_keeps_everything(leads):
    assert filter_date_range(leads, DateRange(), "created_at") == leads
    assert filter_date_range(leads, None, "created_at") == leads


def test_page_beyond_result_is_empty(two_records):
    query = QueryDescriptor(page_index=9, page_size=1)
    result = run_pipeline(two_records, query, ListConfig())
    assert result.page_data == []
    assert result.total == 2
    assert result.page_count == 2


def test_distinct_values(leads):
    assert distinct_values(leads, "status") == ["Lost", "New", "Won"]
    assert distinct_values(leads, "owner.name") == ["Dana", "Lee", "Sam"]
    assert distinct_values(leads, "tags") == ["enterprise", "pilot", "priority"]
    assert distinct_values(leads, "value") == [800, 1200, 5000]


def test_unknown_sort_key_keeps_input_order(leads, lead_config):
    query = QueryDescriptor(sort=SortSpec("nope", DESC))
    result = run_pipeline(leads, query, lead_config)
    assert ids(result.all_filtered_and_sorted) == [1, 2, 3, 4, 5]


def test_empty_records():
    result = run_pipeline([], QueryDescriptor(search_text="x"), ListConfig())
    assert result.page_data == []
    assert result.total == 0
    assert result.page_count == 1


def test_date_strings_sort_by_instant_without_configuration():
    offsets = [
        {"id": 1, "createdAt": "2024-01-01T10:00:00+05:00"},
        {"id": 2, "createdAt": "2024-01-01T06:00:00Z"},
    ]
    assert ids(sort_records(offsets, SortSpec("createdAt", ASC))) == [1, 2]

    us_dates = [
        {"id": 1, "createdAt": "01/05/2024"},
        {"id": 2, "createdAt": "12/25/2023"},
    ]
    assert ids(sort_records(us_dates, SortSpec("createdAt", ASC))) == [2, 1]
    assert ids(sort_records(us_dates, SortSpec("createdAt", DESC))) == [1, 2]


def test_text_with_some_dates_sorts_as_text():
    records = [
        {"id": 1, "code": "b-2024-01-01"},
        {"id": 2, "code": "2024-02-01"},
        {"id": 3, "code": "a"},
    ]
    assert ids(sort_records(records, SortSpec("code", ASC))) == [2, 3, 1]
