"""
Screen registry.

Each record type of the console is described once here: which fields the
engine searches, filters and sorts on, which columns the table and the CSV
export show, and which demo records back it. The engine itself knows nothing
about leads or units; everything screen-specific is passed in from a
ScreenConfig.
"""

from dataclasses import dataclass, field
from typing import Sequence

from record_console.data.demo_records import DEMO_LEADS, DEMO_UNITS
from record_console.models.records import (
    ExportColumn,
    FieldKind,
    ListConfig,
    Record,
)
from record_console.utils import format_date


@dataclass(frozen=True)
class FilterField:
    """A field offered as a filter dropdown."""

    key: str
    label: str


@dataclass(frozen=True)
class ScreenConfig:
    """
    Everything the console needs to know about one record type.

    Attributes:
        name: Registry key, also used as the export module name.
        title: Page title.
        entity_label: Singular label used in notifications.
        list_config: Field configuration handed to the engine.
        columns: Table and CSV columns, in order.
        filter_fields: Fields offered as filter dropdowns.
        unique_fields: Fields the demo service keeps unique.
        demo_records: Fixture records for the demo service.
    """

    name: str
    title: str
    entity_label: str
    list_config: ListConfig
    columns: Sequence[ExportColumn]
    filter_fields: Sequence[FilterField] = field(default_factory=tuple)
    unique_fields: Sequence[str] = field(default_factory=tuple)
    demo_records: Sequence[Record] = field(default_factory=tuple)


def _or_na(value: object, record: Record) -> object:
    return value if value not in (None, "") else "N/A"


def _date_or_na(value: object, record: Record) -> str:
    return format_date(value, "%Y-%m-%d %H:%M")


LEADS = ScreenConfig(
    name="Leads",
    title="Leads",
    entity_label="Lead",
    list_config=ListConfig(
        id_field="id",
        searchable_fields=("name", "company", "status", "source", "owner.name", "tags"),
        timestamp_field="created_at",
        field_kinds={"created_at": FieldKind.DATE, "value": FieldKind.NUMBER},
    ),
    columns=(
        ExportColumn("ID", "id"),
        ExportColumn("Name", "name"),
        ExportColumn("Company", "company"),
        ExportColumn("Status", "status"),
        ExportColumn("Source", "source"),
        ExportColumn("Value", "value"),
        ExportColumn("Owner", "owner.name", formatter=_or_na),
        ExportColumn("Created At", "created_at", formatter=_date_or_na),
        ExportColumn("Notes", "notes", sortable=False),
    ),
    filter_fields=(
        FilterField("status", "Status"),
        FilterField("source", "Source"),
        FilterField("owner.name", "Owner"),
    ),
    unique_fields=("name",),
    demo_records=DEMO_LEADS,
)

UNITS = ScreenConfig(
    name="Units",
    title="Units",
    entity_label="Unit",
    list_config=ListConfig(
        id_field="id",
        searchable_fields=("id", "name", "status", "updated_by_name"),
        timestamp_field="updated_at",
        field_kinds={"updated_at": FieldKind.DATE},
    ),
    columns=(
        ExportColumn("ID", "id"),
        ExportColumn("Unit Name", "name"),
        ExportColumn("Status", "status"),
        ExportColumn("Updated By", "updated_by_name", formatter=_or_na),
        ExportColumn("Updated Role", "updated_by_role", formatter=_or_na),
        ExportColumn("Updated At", "updated_at", formatter=_date_or_na),
    ),
    filter_fields=(FilterField("status", "Status"),),
    unique_fields=("name",),
    demo_records=DEMO_UNITS,
)

SCREENS: dict[str, ScreenConfig] = {
    screen.name.lower(): screen for screen in (LEADS, UNITS)
}


def get_screen(name: str) -> ScreenConfig:
    """
    Look up a screen by name (case-insensitive).

    Raises:
        ValueError: If no screen with that name is registered.
    """
    try:
        return SCREENS[name.lower()]
    except KeyError as exc:
        msg = f"Unknown screen: {name}"
        raise ValueError(msg) from exc
