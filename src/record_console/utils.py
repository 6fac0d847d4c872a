"""
Utility functions for record field access, parsing and formatting.

Provides helpers for:
- Field access by plain name or dotted keypath (nested records)
- Date parsing (multiple formats and value types supported)
- Case-folded text matching used by free-text search
- Display formatting of cell values
"""

from datetime import date, datetime, time, timezone
from typing import Any, Mapping

from benedict import benedict

_MISSING = object()


def field_value(record: Mapping[str, Any], field: str, default: Any = None) -> Any:
    """
    Read a field from a record, supporting dotted keypaths.

    Plain field names are read directly. Names containing a dot (for example
    `department.name`) address nested mappings; a broken path yields the
    default instead of raising.

    Args:
        record: Record mapping.
        field: Field name or dotted keypath.
        default: Value returned when the field is absent.

    Returns:
        The field value, or default.
    """
    value = record.get(field, _MISSING)
    if value is not _MISSING:
        return value
    if "." not in field:
        return default
    try:
        return benedict(record, keypath_separator=".").get(field, default)
    except (ValueError, TypeError):
        return default


def is_number(value: Any) -> bool:
    """Return True for int/float values (booleans are not numbers here)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_date(value: Any) -> datetime | None:
    """
    Parse a timestamp value into a naive UTC datetime.

    Accepts datetime and date objects, epoch seconds, ISO strings (with or
    without a trailing `Z`) and m/d/Y strings. Timezone-aware values are
    converted to UTC and made naive so they compare with naive bounds.

    Args:
        value: Raw field value.

    Returns:
        datetime if parsing succeeds, None otherwise.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _naive_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if is_number(value):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc).replace(tzinfo=None)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str):
        return None

    date_str = value.strip()
    if not date_str:
        return None

    # ISO first (e.g., "2024-12-25", "2024-12-25T10:00:00Z")
    iso = date_str[:-1] + "+00:00" if date_str.endswith("Z") else date_str
    try:
        return _naive_utc(datetime.fromisoformat(iso))
    except ValueError:
        pass

    for fmt in ("%m/%d/%Y", "%m/%d/%y", "%d %b %Y"):
        try:
            return datetime.strptime(date_str, fmt)
        except ValueError:
            continue
    return None


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def fold(value: Any) -> str:
    """Return the trimmed, case-folded text form of a value ("" for None)."""
    if value is None:
        return ""
    return str(value).strip().casefold()


def matches_text(value: Any, needle: str) -> bool:
    """
    Check whether a field value contains an already case-folded needle.

    Lists and tuples match when any element matches; mappings never match
    so nested objects are only searched through explicit keypaths.
    """
    if value is None or isinstance(value, Mapping):
        return False
    if isinstance(value, (list, tuple, set, frozenset)):
        return any(matches_text(item, needle) for item in value)
    return needle in fold(value)


def format_cell(value: Any) -> str:
    """Format a value for display in a table cell."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime("%b %d, %Y %H:%M")
    if isinstance(value, date):
        return value.strftime("%b %d, %Y")
    if isinstance(value, float):
        return f"{value:,.2f}"
    if isinstance(value, (list, tuple)):
        return ", ".join(format_cell(item) for item in value)
    return str(value)


def format_date(value: Any, fmt: str = "%Y-%m-%d", empty: str = "N/A") -> str:
    """Format a timestamp value, returning `empty` when it cannot be parsed."""
    parsed = parse_date(value)
    return parsed.strftime(fmt) if parsed else empty
