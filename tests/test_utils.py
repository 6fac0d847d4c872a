from datetime import date, datetime

import pytest

from record_console.utils import (
    field_value,
    fold,
    format_cell,
    format_date,
    matches_text,
    parse_date,
)


def test_field_value_plain_and_dotted():
    record = {"name": "x", "owner": {"name": "Dana"}}
    assert field_value(record, "name") == "x"
    assert field_value(record, "owner.name") == "Dana"
    assert field_value(record, "missing", "d") == "d"
    assert field_value({"a.b": 1}, "a.b") == 1


def test_field_value_broken_path():
    assert field_value({"owner": None}, "owner.name") is None
    assert field_value({"owner": "text"}, "owner.name", "d") == "d"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-01-05", datetime(2024, 1, 5)),
        ("2024-01-05T09:30:00Z", datetime(2024, 1, 5, 9, 30)),
        ("2024-01-05T09:30:00+02:00", datetime(2024, 1, 5, 7, 30)),
        ("01/05/2024", datetime(2024, 1, 5)),
        ("05 Jan 2024", datetime(2024, 1, 5)),
        (date(2024, 1, 5), datetime(2024, 1, 5)),
        (0, datetime(1970, 1, 1)),
        ("", None),
        ("soon", None),
        (None, None),
        (True, None),
    ],
)
def test_parse_date(value, expected):
    assert parse_date(value) == expected


def test_fold_and_matches_text():
    assert fold("  MiXeD ") == "mixed"
    assert fold(None) == ""
    assert matches_text(["a", "Beta"], "bet")
    assert not matches_text({"name": "beta"}, "bet")
    assert matches_text(1200, "12")


def test_format_cell():
    assert format_cell(None) == ""
    assert format_cell(1234.5) == "1,234.50"
    assert format_cell(["a", "b"]) == "a, b"
    assert format_cell(date(2024, 1, 5)) == "Jan 05, 2024"


def test_format_date():
    assert format_date("2024-01-05T09:30:00Z", "%Y-%m-%d %H:%M") == "2024-01-05 09:30"
    assert format_date(None) == "N/A"
