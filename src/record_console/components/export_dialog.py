"""
Export reason dialog.

Exports are only produced after the user states why they need the data; the
dialog collects that reason and shows validation or audit errors inline.
"""

import reflex as rx

from record_console.engine.export import REASON_MAX_LENGTH, REASON_MIN_LENGTH
from record_console.state import RecordListState


def export_dialog() -> rx.Component:
    """
    Build the modal that asks for the export reason.

    Returns:
        The dialog component, controlled by RecordListState.export_open.
    """
    return rx.dialog.root(
        rx.dialog.content(
            rx.dialog.title("Export Data"),
            rx.dialog.description(
                "Please provide a reason for exporting this data.",
                class_name="muted",
            ),
            rx.text_area(
                value=RecordListState.export_reason,
                on_change=RecordListState.change_export_reason,
                placeholder=f"Reason ({REASON_MIN_LENGTH}-{REASON_MAX_LENGTH} characters)",
                max_length=REASON_MAX_LENGTH,
                rows="4",
                width="100%",
            ),
            rx.cond(
                RecordListState.export_error != "",
                rx.text(RecordListState.export_error, color_scheme="red", size="2"),
            ),
            rx.hstack(
                rx.button(
                    "Cancel",
                    variant="soft",
                    color_scheme="gray",
                    on_click=RecordListState.cancel_export,
                ),
                rx.button(
                    "Export",
                    loading=RecordListState.export_submitting,
                    on_click=RecordListState.submit_export,
                ),
                justify="end",
                spacing="3",
                margin_top="1em",
            ),
        ),
        open=RecordListState.export_open,
        on_open_change=RecordListState.export_dialog_changed,
    )
