"""
Record results display component for Reflex.

Handles the table of the current page, loading and empty states, pagination
and the bulk-selection footer.
"""

import reflex as rx

from record_console.models.reflex_models import ColumnModel, RowModel
from record_console.state import PAGE_SIZE_OPTIONS, RecordListState


def record_results() -> rx.Component:
    """
    Build the record results container.

    Displays loading state, empty state, or the record table based on current
    state.

    Returns:
        The results container component.
    """
    return rx.box(
        rx.cond(
            RecordListState.is_loading & (RecordListState.total == 0),
            _loader(),
            rx.cond(RecordListState.is_empty, _empty(), _results()),
        ),
        id="results-container",
    )


def _results() -> rx.Component:
    return rx.box(
        rx.box(
            rx.text(RecordListState.result_summary, class_name="muted"),
            class_name="results-summary",
        ),
        rx.table.root(
            rx.table.header(
                rx.table.row(
                    rx.table.column_header_cell(
                        rx.checkbox(
                            checked=RecordListState.all_visible_selected,
                            on_change=RecordListState.toggle_visible,
                        ),
                        width="40px",
                    ),
                    rx.foreach(RecordListState.columns, _header_cell),
                    rx.table.column_header_cell(""),
                ),
            ),
            rx.table.body(rx.foreach(RecordListState.rows, _row)),
            variant="surface",
            class_name="record-table",
        ),
        _pagination(),
        rx.cond(RecordListState.selected_count > 0, _selection_bar()),
        class_name="results",
    )


def _header_cell(column: ColumnModel) -> rx.Component:
    return rx.table.column_header_cell(
        rx.cond(
            column.sortable,
            rx.text(
                column.label,
                " ",
                column.sort_indicator,
                on_click=RecordListState.sort_by(column.key),
                class_name="sortable-header",
            ),
            rx.text(column.label),
        ),
    )


def _row(row: RowModel) -> rx.Component:
    return rx.table.row(
        rx.table.cell(
            rx.checkbox(
                checked=row.selected,
                on_change=lambda checked: RecordListState.toggle_row(row.key, checked),
            ),
        ),
        rx.foreach(row.cells, lambda cell: rx.table.cell(cell)),
        rx.table.cell(
            rx.icon_button(
                rx.icon("trash-2", size=14),
                size="1",
                color_scheme="red",
                variant="ghost",
                on_click=RecordListState.delete_row(row.key),
                title="Delete",
            ),
        ),
        class_name=rx.cond(row.selected, "row selected", "row"),
    )


def _pagination() -> rx.Component:
    return rx.hstack(
        rx.button(
            rx.icon("chevron-left", size=16),
            variant="soft",
            disabled=RecordListState.page_index <= 1,
            on_click=RecordListState.previous_page,
        ),
        rx.text(
            "Page ",
            RecordListState.page_index,
            " of ",
            RecordListState.page_count,
            class_name="muted",
        ),
        rx.button(
            rx.icon("chevron-right", size=16),
            variant="soft",
            disabled=RecordListState.page_index >= RecordListState.page_count,
            on_click=RecordListState.next_page,
        ),
        rx.spacer(),
        rx.text("Rows per page", size="1", class_name="muted"),
        rx.select(
            PAGE_SIZE_OPTIONS,
            value=RecordListState.page_size,
            on_change=RecordListState.change_page_size,
            size="1",
        ),
        class_name="pagination",
        align="center",
        spacing="3",
    )


def _selection_bar() -> rx.Component:
    return rx.hstack(
        rx.text(RecordListState.selected_count, " selected"),
        rx.spacer(),
        rx.button(
            "Clear",
            variant="soft",
            on_click=RecordListState.clear_selection,
        ),
        rx.button(
            rx.icon("trash-2", size=16),
            "Delete Selected",
            color_scheme="red",
            on_click=RecordListState.delete_selected,
        ),
        class_name="card selection-bar",
        align="center",
        spacing="3",
    )


def _empty() -> rx.Component:
    """Build the empty state when no records match."""
    return rx.box(
        rx.icon("file-x", class_name="empty-icon", size=60),
        rx.heading("No records found", size="3", as_="h3"),
        rx.cond(
            RecordListState.search_text != "",
            rx.text(
                rx.text.span('No results match "'),
                rx.text.span(RecordListState.search_text),
                rx.text.span('". Try a different search term.'),
                class_name="muted",
            ),
            rx.text("No records available.", class_name="muted"),
        ),
        rx.button("Clear filters", variant="soft", on_click=RecordListState.clear_filters),
        class_name="card empty-state",
    )


def _loader() -> rx.Component:
    """Build the loading indicator for the initial load."""
    return rx.box(
        rx.box(class_name="spinner"),
        rx.text("Loading records...", class_name="muted"),
        class_name="card loading-state",
    )
