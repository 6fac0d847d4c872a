"""
Reflex application entry point for the Record Console.

This module initializes the Reflex app and defines the main page layout.
"""

import os

import reflex as rx

from record_console.components import export_dialog, record_results, search_panel
from record_console.lib import logs
from record_console.state import SCREEN_TITLES, RecordListState

LOG = logs.logger(__file__)

# Configuration from environment
APP_PORT = int(os.getenv("RECORD_CONSOLE_PORT", "8000"))
APP_TITLE = "Record Console"

_FONT_URL = "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap"


def page_header() -> rx.Component:
    """Build the title bar with the screen switcher."""
    return rx.hstack(
        rx.box(
            rx.heading(RecordListState.screen_title, size="6", as_="h1"),
            rx.text(APP_TITLE, class_name="muted"),
        ),
        rx.spacer(),
        rx.segmented_control.root(
            *[rx.segmented_control.item(title, value=title) for title in SCREEN_TITLES],
            value=RecordListState.screen_title,
            on_change=RecordListState.switch_screen,
        ),
        class_name="page-header",
        align="center",
    )


def index() -> rx.Component:
    """
    Build the main page layout.

    Returns:
        The complete page component with header, search, results and the
        export dialog.
    """
    return rx.box(
        rx.box(
            page_header(),
            search_panel(),
            record_results(),
            export_dialog(),
            class_name="app-container",
        ),
        class_name="app-shell",
    )


# Create the Reflex app
app = rx.App(
    theme=rx.theme(
        appearance="light",
        has_background=True,
        radius="large",
    ),
    stylesheets=[
        _FONT_URL,
        "/styles.css",
    ],
)

# Add the index page
app.add_page(
    index,
    title=APP_TITLE,
    on_load=RecordListState.refresh,
)

LOG.info("Record Console configured - port:%s", APP_PORT)


def main() -> None:
    """Entrypoint for the `record-console` script."""
    import subprocess
    import sys

    subprocess.run([sys.executable, "-m", "reflex", "run", "--port", str(APP_PORT)])


if __name__ == "__main__":
    main()
