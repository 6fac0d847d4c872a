"""
Reflex-compatible view models for the Record Console.

These models extend rx.Base so they can be used with rx.foreach and other
Reflex reactive components. They carry display strings only; the records
themselves stay inside the per-screen ListView.
"""

import reflex as rx

ALL_OPTION = "All"


class ColumnModel(rx.Base):
    """Table column header."""

    key: str = ""
    label: str = ""
    sortable: bool = True
    sort_indicator: str = ""


class RowModel(rx.Base):
    """One visible table row."""

    key: str = ""
    cells: list[str] = []
    selected: bool = False


class FilterFieldModel(rx.Base):
    """A multi-select filter with its options and accepted values."""

    key: str = ""
    label: str = ""
    options: list[str] = []
    selected: list[str] = []
    summary: str = ALL_OPTION
