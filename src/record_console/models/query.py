"""
Query descriptor: the serializable state of one list screen.

The descriptor captures everything the user asked to see (search text,
field filters, date range, sort key/direction, page index/size). It holds
field values only, never record payloads, so the record collection can be
replaced at any time without invalidating it.

Mutators keep the paging invariant: any change that alters the result set
(page size, filters, search text, date range) moves back to page 1. Sorting
keeps the current page. Malformed values are coerced, never raised.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, Mapping

from record_console.lib import objects
from record_console.utils import parse_date

ASC = "asc"
DESC = "desc"
_ORDERS = (ASC, DESC)

DEFAULT_PAGE_SIZE = 10


def _positive_int(value: Any, default: int) -> int:
    """Coerce a value to an int >= 1, falling back to default."""
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return max(number, 1)


@dataclass
class SortSpec:
    """
    Sort key and direction.

    Sorting only applies when both key and order are set.
    """

    key: str | None = None
    order: str | None = None

    def __post_init__(self) -> None:
        self.key = self.key if isinstance(self.key, str) and self.key else None
        self.order = self.order if self.order in _ORDERS else None

    @property
    def active(self) -> bool:
        """True when both key and order are set."""
        return bool(self.key and self.order)

    def to_dict(self) -> dict:
        return {"key": self.key, "order": self.order}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "SortSpec":
        if not isinstance(data, Mapping):
            return cls()
        return cls(key=data.get("key"), order=data.get("order"))


@dataclass
class DateRange:
    """
    Inclusive date range applied to a screen's timestamp field.

    Either bound may be None for a one-sided range. A `date` bound covers the
    whole day: start means 00:00:00, end means 23:59:59.999999.
    """

    start: date | datetime | None = None
    end: date | datetime | None = None

    @property
    def active(self) -> bool:
        return self.start is not None or self.end is not None

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "DateRange | None":
        """Deserialize from a mapping or a [start, end] pair."""
        if isinstance(data, Mapping):
            start, end = data.get("start"), data.get("end")
        elif isinstance(data, (list, tuple)) and len(data) == 2:
            start, end = data
        else:
            return None
        date_range = cls(start=_bound(start), end=_bound(end))
        return date_range if date_range.active else None


def _bound(value: Any) -> date | datetime | None:
    """Parse a serialized range bound; date-only strings stay dates."""
    if value is None or isinstance(value, (date, datetime)):
        return value
    parsed = parse_date(value)
    if parsed is None:
        return None
    if isinstance(value, str) and len(value.strip()) == 10:
        return parsed.date()
    return parsed


@dataclass
class QueryDescriptor:
    """
    Search, filter, sort and paging state of a list screen.

    Attributes:
        page_index: Current page number (1-indexed).
        page_size: Number of records per page.
        sort: Sort key and direction.
        search_text: Free-text search, matched case-insensitively.
        filters: Accepted values per field. An empty list means no constraint.
        date_range: Optional range applied to the screen's timestamp field.
    """

    page_index: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort: SortSpec = field(default_factory=SortSpec)
    search_text: str = ""
    filters: dict[str, list] = field(default_factory=dict)
    date_range: DateRange | None = None

    def __post_init__(self) -> None:
        self.page_index = _positive_int(self.page_index, 1)
        self.page_size = _positive_int(self.page_size, DEFAULT_PAGE_SIZE)
        self.search_text = self.search_text if isinstance(self.search_text, str) else ""
        self.filters = {
            key: list(values)
            for key, values in (self.filters or {}).items()
            if isinstance(key, str) and isinstance(values, (list, tuple, set, frozenset))
        }

    @property
    def offset(self) -> int:
        """Index of the first record of the current page."""
        return (self.page_index - 1) * self.page_size

    @property
    def active_filters(self) -> dict[str, list]:
        """Filters that actually constrain the result."""
        return {key: values for key, values in self.filters.items() if values}

    def set_page_index(self, page_index: int) -> None:
        self.page_index = _positive_int(page_index, 1)

    def set_page_size(self, page_size: int) -> None:
        self.page_size = _positive_int(page_size, self.page_size)
        self.page_index = 1

    def set_sort(self, key: str | None, order: str | None) -> None:
        self.sort = SortSpec(key=key, order=order)

    def toggle_sort(self, key: str) -> None:
        """
        Cycle the sort on a column header click.

        A new key starts ascending; the same key goes asc -> desc -> unsorted.
        """
        if self.sort.key != key or not self.sort.active:
            self.set_sort(key, ASC)
        elif self.sort.order == ASC:
            self.set_sort(key, DESC)
        else:
            self.set_sort(None, None)

    def set_search_text(self, text: str | None) -> None:
        self.search_text = text or ""
        self.page_index = 1

    def set_filter(self, field_name: str, values: Iterable[Any] | None) -> None:
        """Replace the accepted values of one field; empty removes it."""
        accepted = list(values or [])
        if accepted:
            self.filters[field_name] = accepted
        else:
            self.filters.pop(field_name, None)
        self.page_index = 1

    def toggle_filter_value(self, field_name: str, value: Any, checked: bool) -> None:
        """Add or remove one accepted value of a field (multi-select filters)."""
        accepted = [v for v in self.filters.get(field_name, []) if v != value]
        if checked:
            accepted.append(value)
        self.set_filter(field_name, accepted)

    def set_filters(self, filters: Mapping[str, Iterable[Any]] | None) -> None:
        self.filters = {
            key: list(values) for key, values in (filters or {}).items() if values
        }
        self.page_index = 1

    def clear_filters(self) -> None:
        """Drop field filters, search text and date range."""
        self.filters = {}
        self.search_text = ""
        self.date_range = None
        self.page_index = 1

    def set_date_range(
        self,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
    ) -> None:
        date_range = DateRange(start=start, end=end)
        self.date_range = date_range if date_range.active else None
        self.page_index = 1

    def clamp(self, total: int) -> bool:
        """
        Keep page_index inside the result.

        Args:
            total: Number of records after filtering.

        Returns:
            True if page_index changed.
        """
        last_page = max((total + self.page_size - 1) // self.page_size, 1)
        if self.page_index > last_page:
            self.page_index = last_page
            return True
        return False

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "page_index": self.page_index,
            "page_size": self.page_size,
            "sort": self.sort.to_dict(),
            "search_text": self.search_text,
            "filters": {key: list(values) for key, values in self.filters.items()},
            "date_range": self.date_range.to_dict() if self.date_range else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "QueryDescriptor":
        """Deserialize from a dictionary, ignoring malformed entries."""
        if not isinstance(data, Mapping):
            return cls()
        filters = data.get("filters")
        return cls(
            page_index=data.get("page_index", 1),
            page_size=data.get("page_size", DEFAULT_PAGE_SIZE),
            sort=SortSpec.from_dict(data.get("sort")),
            search_text=data.get("search_text") or "",
            filters=filters if isinstance(filters, Mapping) else {},
            date_range=DateRange.from_dict(data.get("date_range")),
        )

    def to_json(self) -> str:
        return objects.to_json(self.to_dict())

    def fingerprint(self) -> str:
        """Stable digest of the descriptor, used to cache pipeline results."""
        return objects.fingerprint(self.to_dict())
