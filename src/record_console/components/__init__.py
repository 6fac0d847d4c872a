"""
Reflex UI components for the Record Console.

This package provides modular, composable components:
- search_panel: Search input, filter dropdowns, date range and export button
- results: Record table with sorting, selection and pagination
- export_dialog: Modal collecting the export reason

All components are functions that return Reflex components bound to
RecordListState.
"""

from record_console.components.export_dialog import export_dialog
from record_console.components.results import record_results
from record_console.components.search_panel import search_panel

__all__ = [
    "export_dialog",
    "record_results",
    "search_panel",
]
