"""
Filter-sort-paginate pipeline.

`run_pipeline` turns a record collection and a QueryDescriptor into the
visible page, the total match count and the full filtered/sorted list used
for export. It is a pure function: the same inputs always give the same
output, nothing is mutated, and malformed descriptor values degrade to
"no constraint" instead of raising.

Stages always run in this order:

    date range -> field filters -> free-text search -> sort -> paginate
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Iterable, Mapping, Sequence

from record_console.models.query import DESC, DateRange, QueryDescriptor, SortSpec
from record_console.models.records import FieldKind, ListConfig, Record
from record_console.utils import (
    field_value,
    fold,
    is_number,
    matches_text,
    parse_date,
)

_COLLECTIONS = (list, tuple, set, frozenset)


@dataclass(frozen=True)
class PipelineResult:
    """
    Output of one pipeline run.

    Attributes:
        page_data: Records of the requested page.
        total: Number of records after filtering (before slicing).
        all_filtered_and_sorted: Every matching record in display order.
        page_index: Page the slice was taken for.
        page_size: Page size the slice was taken with.
    """

    page_data: list[Record] = field(default_factory=list)
    total: int = 0
    all_filtered_and_sorted: list[Record] = field(default_factory=list)
    page_index: int = 1
    page_size: int = 1

    @property
    def page_count(self) -> int:
        """Number of pages (at least 1, so an empty list still has page 1)."""
        return max((self.total + self.page_size - 1) // self.page_size, 1)

    @property
    def has_more(self) -> bool:
        """True when pages exist after the current one."""
        return self.page_index * self.page_size < self.total


def run_pipeline(
    records: Sequence[Record],
    query: QueryDescriptor,
    config: ListConfig,
) -> PipelineResult:
    """
    Apply the query to the records.

    Args:
        records: The full record collection (left untouched).
        query: Search, filter, sort and paging state.
        config: Field configuration of the screen.

    Returns:
        PipelineResult with the page slice, total and full ordered list.
    """
    processed = list(records)
    processed = filter_date_range(processed, query.date_range, config.timestamp_field)
    processed = filter_fields(processed, query.active_filters)
    processed = search(processed, query.search_text, config.searchable_fields)
    processed = sort_records(processed, query.sort, config.field_kinds)

    start = query.offset
    return PipelineResult(
        page_data=processed[start : start + query.page_size],
        total=len(processed),
        all_filtered_and_sorted=processed,
        page_index=query.page_index,
        page_size=query.page_size,
    )


def filter_date_range(
    records: list[Record],
    date_range: DateRange | None,
    timestamp_field: str | None,
) -> list[Record]:
    """Keep records whose timestamp lies in the inclusive range."""
    if date_range is None or not date_range.active or not timestamp_field:
        return records

    start = _range_start(date_range.start)
    end = _range_end(date_range.end)
    kept = []
    for record in records:
        stamp = parse_date(field_value(record, timestamp_field))
        if stamp is None:
            continue
        if start is not None and stamp < start:
            continue
        if end is not None and stamp > end:
            continue
        kept.append(record)
    return kept


def _range_start(bound: date | datetime | None) -> datetime | None:
    if bound is None:
        return None
    return parse_date(bound)


def _range_end(bound: date | datetime | None) -> datetime | None:
    if bound is None:
        return None
    if isinstance(bound, date) and not isinstance(bound, datetime):
        return datetime.combine(bound, time.max)
    return parse_date(bound)


def filter_fields(
    records: list[Record],
    filters: Mapping[str, Sequence[Any]],
) -> list[Record]:
    """AND across fields, OR within the accepted values of one field."""
    if not filters:
        return records

    prepared = [
        (name, list(values), {str(value) for value in values})
        for name, values in filters.items()
        if values
    ]
    return [
        record
        for record in records
        if all(
            _accepts(field_value(record, name), accepted, accepted_text)
            for name, accepted, accepted_text in prepared
        )
    ]


def _accepts(value: Any, accepted: list, accepted_text: set[str]) -> bool:
    if isinstance(value, _COLLECTIONS):
        return any(_accepts(item, accepted, accepted_text) for item in value)
    if value is None:
        return False
    if any(value == candidate for candidate in accepted):
        return True
    return str(value) in accepted_text


def search(
    records: list[Record],
    search_text: str,
    searchable_fields: Sequence[str] | None,
) -> list[Record]:
    """Keep records where any searchable field contains the search text."""
    needle = fold(search_text)
    if not needle:
        return records

    def _matches(record: Record) -> bool:
        fields: Iterable[str] = (
            searchable_fields if searchable_fields is not None else record.keys()
        )
        return any(matches_text(field_value(record, name), needle) for name in fields)

    return [record for record in records if _matches(record)]


def sort_records(
    records: list[Record],
    sort: SortSpec,
    field_kinds: Mapping[str, FieldKind] | None = None,
) -> list[Record]:
    """
    Stable-sort records by the sort key.

    Missing values compare like an empty string: first in ascending order,
    last in descending order. Equal keys keep their input order in both
    directions.
    """
    if not sort.active or not records:
        return records

    values = [field_value(record, sort.key) for record in records]
    kind = (field_kinds or {}).get(sort.key) or infer_kind(values)
    keys = [sort_key(value, kind) for value in values]
    order = sorted(
        range(len(records)),
        key=keys.__getitem__,
        reverse=sort.order == DESC,
    )
    return [records[index] for index in order]


def infer_kind(values: Iterable[Any]) -> FieldKind:
    """Guess how to compare a field from the values present in the data."""
    present = [value for value in values if value is not None]
    if not present:
        return FieldKind.TEXT
    if all(is_number(value) for value in present):
        return FieldKind.NUMBER
    if all(_is_date_like(value) for value in present):
        return FieldKind.DATE
    return FieldKind.TEXT


def _is_date_like(value: Any) -> bool:
    """True for date/datetime values and strings parse_date understands."""
    if isinstance(value, (date, datetime)):
        return True
    if not isinstance(value, str) or _to_number(value) is not None:
        return False
    return parse_date(value) is not None


def sort_key(value: Any, kind: FieldKind) -> tuple:
    """Build a comparable key; (0, ...) marks a missing value."""
    if value is None:
        return (0, "")
    if kind is FieldKind.NUMBER:
        number = _to_number(value)
        return (0, "") if number is None else (1, number)
    if kind is FieldKind.DATE:
        stamp = parse_date(value)
        return (0, "") if stamp is None else (1, stamp)
    return (1, fold(value))


def _to_number(value: Any) -> float | None:
    if is_number(value):
        return value
    try:
        return float(str(value).replace(",", ""))
    except ValueError:
        return None


def distinct_values(records: Iterable[Record], field_name: str) -> list[Any]:
    """
    Return the distinct present values of a field, sorted for display.

    List-valued fields contribute each element. Used to offer filter options
    derived from the loaded data.
    """
    seen: dict[str, Any] = {}
    for record in records:
        value = field_value(record, field_name)
        items = value if isinstance(value, _COLLECTIONS) else [value]
        for item in items:
            if item is None or item == "":
                continue
            seen.setdefault(str(item), item)

    values = list(seen.values())
    kind = infer_kind(values)
    return sorted(values, key=lambda value: sort_key(value, kind))
