"""
Search panel component for the Record Console.

Provides the search input, the multi-select filters, the date range inputs and
the export button.
"""

import reflex as rx

from record_console.models.reflex_models import FilterFieldModel
from record_console.state import RecordListState


def search_panel() -> rx.Component:
    """
    Build the search panel with search input, filters and actions.

    Returns:
        The search panel component.
    """
    return rx.box(
        rx.box(
            rx.icon("search", class_name="input-icon"),
            rx.input(
                placeholder="Search...",
                value=RecordListState.search_text,
                on_change=RecordListState.search,
                class_name="search-input",
                debounce=300,
            ),
            class_name="input-with-icon",
        ),
        rx.hstack(
            rx.foreach(RecordListState.filter_fields, _filter_select),
            _date_input("From", RecordListState.date_start, RecordListState.change_date_start),
            _date_input("To", RecordListState.date_end, RecordListState.change_date_end),
            rx.spacer(),
            rx.button(
                rx.icon("filter-x", size=16),
                "Clear",
                variant="soft",
                on_click=RecordListState.clear_filters,
            ),
            rx.button(
                rx.icon("download", size=16),
                "Export CSV",
                on_click=RecordListState.open_export,
            ),
            class_name="filter-row",
            align="end",
            wrap="wrap",
            spacing="3",
        ),
        class_name="card search-card",
    )


def _filter_select(field: FilterFieldModel) -> rx.Component:
    return rx.vstack(
        rx.text(field.label, size="1", class_name="muted"),
        rx.popover.root(
            rx.popover.trigger(
                rx.button(
                    field.summary,
                    rx.icon("chevron-down", size=14),
                    variant="surface",
                    color_scheme="gray",
                ),
            ),
            rx.popover.content(
                rx.vstack(
                    rx.foreach(
                        field.options,
                        lambda option: _filter_option(field, option),
                    ),
                    rx.button(
                        "All",
                        size="1",
                        variant="ghost",
                        on_click=RecordListState.clear_filter(field.key),
                    ),
                    spacing="2",
                ),
            ),
        ),
        spacing="1",
    )


def _filter_option(field: FilterFieldModel, option: rx.Var) -> rx.Component:
    return rx.checkbox(
        option,
        checked=field.selected.contains(option),
        on_change=lambda checked: RecordListState.toggle_filter_value(
            field.key, option, checked
        ),
    )


def _date_input(label: str, value, on_change) -> rx.Component:
    return rx.vstack(
        rx.text(label, size="1", class_name="muted"),
        rx.input(type="date", value=value, on_change=on_change),
        spacing="1",
    )
