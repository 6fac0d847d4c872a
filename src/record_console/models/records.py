"""
Record typing and per-screen field configuration.

The engine is generic over "a mapping with a stable identity". Everything
else it needs to know about a record type (which field is the identity,
which fields free-text search looks at, which field carries the timestamp
for date-range filtering, how to compare sort keys) is supplied through a
ListConfig instead of being compiled into the engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Sequence

from record_console.utils import field_value

Identity = str | int
Record = Mapping[str, Any]


class FieldKind(str, Enum):
    """How a field's values compare when sorting."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"


@dataclass(slots=True)
class ListConfig:
    """
    Field configuration for one list screen.

    Attributes:
        id_field: Name of the identity field.
        searchable_fields: Fields matched by free-text search. None searches
            every top-level value of the record.
        timestamp_field: Field the date-range filter applies to.
        field_kinds: Explicit sort comparison kind per field. Fields that are
            not listed have their kind inferred from their values.
    """

    id_field: str = "id"
    searchable_fields: Sequence[str] | None = None
    timestamp_field: str | None = None
    field_kinds: Mapping[str, FieldKind] = field(default_factory=dict)

    def identity_of(self, record: Record) -> Identity | None:
        """Return the identity of a record, or None when it has none."""
        return record.get(self.id_field)

    def identities(self, records: Iterable[Record]) -> list[Identity]:
        """Return the identities of the given records, in order."""
        result = []
        for record in records:
            identity = self.identity_of(record)
            if identity is not None:
                result.append(identity)
        return result


Formatter = Callable[[Any, Record], Any]


@dataclass(slots=True)
class ExportColumn:
    """
    One column of a screen's table and CSV export.

    Attributes:
        label: Human-readable header label.
        key: Field name or dotted keypath the value is read from.
        formatter: Optional transform applied to the raw value before it is
            written (receives the value and the whole record).
        sortable: Whether the column header toggles sorting in the UI.
    """

    label: str
    key: str
    formatter: Formatter | None = None
    sortable: bool = True

    def value(self, record: Record) -> Any:
        """Return the (formatted) value of this column for a record."""
        raw = field_value(record, self.key)
        if self.formatter is not None:
            return self.formatter(raw, record)
        return raw


@dataclass(slots=True)
class RecordListResult:
    """Response of a record service list call."""

    records: Sequence[Record]
    total: int | None = None

    def __post_init__(self) -> None:
        if self.total is None:
            self.total = len(self.records)
