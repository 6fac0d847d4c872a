"""Reflex configuration for the Record Console application."""

import reflex as rx

config = rx.Config(
    app_name="record_console",
    # Use the src directory structure
    app_module_import="record_console.app",
)
