"""
Reflex state management for the Record Console.

The engine objects of a mounted screen (ListView, export controller,
mutation-refresh coordinator) live in a ScreenSession kept per browser
session. RecordListState is a projection of that session: after every event
the current page, columns, filters and selection are copied into plain
display vars for the components.

Loading, deleting and exporting run as background events so the screen
stays responsive (the user can sort or page while a request is pending).
Results of a request are only projected if the screen is still the one that
issued it.
"""

import os
from dataclasses import dataclass
from datetime import date
from typing import Any

import reflex as rx
from reflex.event import EventSpec

from record_console.engine import (
    ExportController,
    ListView,
    MutationRefreshCoordinator,
    ReasonValidationError,
)
from record_console.lib import logs
from record_console.lib.sessions import SessionStore
from record_console.models.common import NotificationType
from record_console.models.query import ASC, QueryDescriptor
from record_console.models.records import Identity
from record_console.models.reflex_models import (
    ALL_OPTION,
    ColumnModel,
    FilterFieldModel,
    RowModel,
)
from record_console.screens import SCREENS, ScreenConfig, get_screen
from record_console.services import get_audit_log, get_record_service
from record_console.services.notifications import CollectingNotificationSink
from record_console.utils import format_cell

LOG = logs.logger(__file__)

# Configuration from environment
PAGE_SIZE = int(os.getenv("RECORD_CONSOLE_PAGE_SIZE", "10"))
DEFAULT_SCREEN = os.getenv("RECORD_CONSOLE_SCREEN", "leads").lower()
PAGE_SIZE_OPTIONS = ["5", "10", "25", "50"]
SCREEN_TITLES = [screen.title for screen in SCREENS.values()]


@dataclass
class ScreenSession:
    """Engine objects of one mounted screen."""

    screen: ScreenConfig
    view: ListView
    notifications: CollectingNotificationSink
    coordinator: MutationRefreshCoordinator
    exporter: ExportController

    def identity_for(self, key: str) -> Identity | None:
        """Map a row key (identity rendered as text) back to the identity."""
        for identity in self.screen.list_config.identities(self.view.records):
            if str(identity) == key:
                return identity
        return None


def open_screen(name: str) -> ScreenSession:
    """Build a fresh engine for a screen."""
    screen = get_screen(name)
    notifications = CollectingNotificationSink()
    view = ListView(screen.list_config, QueryDescriptor(page_size=PAGE_SIZE))
    return ScreenSession(
        screen=screen,
        view=view,
        notifications=notifications,
        coordinator=MutationRefreshCoordinator(
            get_record_service(screen.name),
            view,
            notifications,
            entity_label=screen.entity_label,
        ),
        exporter=ExportController(
            screen.name, screen.columns, get_audit_log(), notifications
        ),
    )


def close_screen(session: ScreenSession) -> None:
    """Drop the query, selection and any pending export of a screen."""
    session.view.reset()
    session.exporter.cancel()


# Mounted screens keyed by browser session token
_SESSIONS: SessionStore[ScreenSession] = SessionStore(on_evict=close_screen)


def _toasts(notifications: CollectingNotificationSink) -> list[EventSpec]:
    """Turn pending notifications into toast events."""
    events = []
    for notification in notifications.drain():
        if notification.type is NotificationType.SUCCESS:
            events.append(rx.toast.success(notification.text))
        elif notification.type is NotificationType.ERROR:
            events.append(rx.toast.error(notification.text))
        else:
            events.append(rx.toast.info(notification.text))
    return events


def _parse_input_date(value: str) -> date | None:
    try:
        return date.fromisoformat(value) if value else None
    except ValueError:
        return None


class RecordListState(rx.State):
    """
    Display state of the record list screen.

    Handles search, filters, sorting, paging, selection, deletes and the
    export dialog for the active screen.
    """

    screen: str = DEFAULT_SCREEN
    title: str = ""

    columns: list[ColumnModel] = []
    rows: list[RowModel] = []
    filter_fields: list[FilterFieldModel] = []

    total: int = 0
    page_index: int = 1
    page_count: int = 1
    page_size: str = str(PAGE_SIZE)
    search_text: str = ""
    date_start: str = ""
    date_end: str = ""
    selected_count: int = 0
    all_visible_selected: bool = False
    is_loading: bool = True

    export_open: bool = False
    export_reason: str = ""
    export_error: str = ""
    export_submitting: bool = False

    @rx.var
    def result_summary(self) -> str:
        """Generate summary text for the current result."""
        noun = "record" if self.total == 1 else "records"
        base = f"{self.total} {noun} found"
        if self.search_text.strip():
            return f'{base} for "{self.search_text.strip()}"'
        return base

    @rx.var
    def is_empty(self) -> bool:
        return not self.is_loading and len(self.rows) == 0

    @rx.var
    def screen_title(self) -> str:
        return get_screen(self.screen).title

    # -- session helpers -----------------------------------------------------

    def _session_key(self) -> str:
        return self.router.session.client_token

    def _screen_session(self) -> ScreenSession:
        key = self._session_key()
        session = _SESSIONS.get(key)
        if session is None or session.screen.name.lower() != self.screen:
            session = open_screen(self.screen)
            _SESSIONS.set(key, session)
        return session

    def _is_current(self, session: ScreenSession) -> bool:
        return _SESSIONS.peek(self._session_key()) is session

    def _project(self, session: ScreenSession) -> None:
        """Copy the engine state into the display vars."""
        view, screen = session.view, session.screen
        query, result = view.query, view.result
        config = screen.list_config

        self.title = screen.title
        self.columns = [
            ColumnModel(
                key=column.key,
                label=column.label,
                sortable=column.sortable,
                sort_indicator=_sort_indicator(query, column.key),
            )
            for column in screen.columns
        ]
        self.rows = [
            RowModel(
                key=str(config.identity_of(record)),
                cells=[format_cell(column.value(record)) for column in screen.columns],
                selected=view.is_selected(config.identity_of(record)),
            )
            for record in result.page_data
        ]
        self.filter_fields = [
            FilterFieldModel(
                key=field.key,
                label=field.label,
                options=[str(v) for v in view.distinct_values(field.key)],
                selected=_selected_options(query, field.key),
                summary=_filter_summary(query, field.key),
            )
            for field in screen.filter_fields
        ]
        self.total = result.total
        self.page_index = query.page_index
        self.page_count = result.page_count
        self.page_size = str(query.page_size)
        self.search_text = query.search_text
        date_range = query.date_range
        self.date_start = _input_date(date_range.start if date_range else None)
        self.date_end = _input_date(date_range.end if date_range else None)
        self.selected_count = view.selection.count
        self.all_visible_selected = view.all_visible_selected

    # -- loading -------------------------------------------------------------

    @rx.event(background=True)
    async def refresh(self):
        """Load the active screen's records from its record service."""
        async with self:
            session = self._screen_session()
            self.is_loading = True
            self._project(session)
        await session.coordinator.reload()
        async with self:
            if self._is_current(session):
                self._project(session)
                self.is_loading = False
        for event in _toasts(session.notifications):
            yield event

    @rx.event
    def switch_screen(self, title: str):
        """Show another record type; query and selection start over."""
        name = title.lower()
        if name == self.screen:
            return None
        old = _SESSIONS.pop(self._session_key())
        if old is not None:
            close_screen(old)
        LOG.info("switch_screen - from:%s to:%s", self.screen, name)
        self.screen = name
        self.export_open = False
        self.rows = []
        return RecordListState.refresh

    # -- query ---------------------------------------------------------------

    @rx.event
    def search(self, text: str):
        session = self._screen_session()
        session.view.set_search_text(text)
        self._project(session)

    @rx.event
    def toggle_filter_value(self, key: str, value: str, checked: bool):
        """Accept or stop accepting one value; values of a field are ORed."""
        session = self._screen_session()
        session.view.toggle_filter_value(key, value, checked)
        self._project(session)

    @rx.event
    def clear_filter(self, key: str):
        session = self._screen_session()
        session.view.set_filter(key, None)
        self._project(session)

    @rx.event
    def change_date_start(self, value: str):
        session = self._screen_session()
        date_range = session.view.query.date_range
        session.view.set_date_range(
            _parse_input_date(value), date_range.end if date_range else None
        )
        self._project(session)

    @rx.event
    def change_date_end(self, value: str):
        session = self._screen_session()
        date_range = session.view.query.date_range
        session.view.set_date_range(
            date_range.start if date_range else None, _parse_input_date(value)
        )
        self._project(session)

    @rx.event
    def clear_filters(self):
        session = self._screen_session()
        session.view.clear_filters()
        self._project(session)

    @rx.event
    def sort_by(self, key: str):
        session = self._screen_session()
        session.view.toggle_sort(key)
        self._project(session)

    @rx.event
    def go_to_page(self, page_index: int):
        session = self._screen_session()
        session.view.set_page_index(page_index)
        self._project(session)

    @rx.event
    def next_page(self):
        return RecordListState.go_to_page(self.page_index + 1)

    @rx.event
    def previous_page(self):
        return RecordListState.go_to_page(max(self.page_index - 1, 1))

    @rx.event
    def change_page_size(self, value: str):
        session = self._screen_session()
        session.view.set_page_size(int(value))
        self._project(session)

    # -- selection -----------------------------------------------------------

    @rx.event
    def toggle_row(self, key: str, checked: bool):
        session = self._screen_session()
        identity = session.identity_for(key)
        if identity is not None:
            session.view.toggle_row(identity, checked)
        self._project(session)

    @rx.event
    def toggle_visible(self, checked: bool):
        session = self._screen_session()
        session.view.toggle_visible(checked)
        self._project(session)

    @rx.event
    def clear_selection(self):
        session = self._screen_session()
        session.view.clear_selection()
        self._project(session)

    # -- mutations -----------------------------------------------------------

    @rx.event(background=True)
    async def delete_row(self, key: str):
        async with self:
            session = self._screen_session()
        identity = session.identity_for(key)
        if identity is None:
            return
        await session.coordinator.delete(identity)
        async with self:
            if self._is_current(session):
                self._project(session)
        for event in _toasts(session.notifications):
            yield event

    @rx.event(background=True)
    async def delete_selected(self):
        async with self:
            session = self._screen_session()
        identities = session.view.selection.ordered()
        await session.coordinator.delete_many(identities)
        async with self:
            if self._is_current(session):
                self._project(session)
        for event in _toasts(session.notifications):
            yield event

    # -- export --------------------------------------------------------------

    @rx.event
    def open_export(self):
        session = self._screen_session()
        self.export_reason = ""
        self.export_error = ""
        self.export_open = session.exporter.request(session.view.all_filtered_and_sorted)
        return _toasts(session.notifications)

    @rx.event
    def change_export_reason(self, value: str):
        self.export_reason = value
        self.export_error = ""

    @rx.event
    def cancel_export(self):
        self._screen_session().exporter.cancel()
        self.export_open = False
        self.export_submitting = False
        self.export_error = ""

    @rx.event
    def export_dialog_changed(self, is_open: bool):
        if not is_open:
            return RecordListState.cancel_export
        return None

    @rx.event(background=True)
    async def submit_export(self):
        async with self:
            session = self._screen_session()
            reason = self.export_reason
            self.export_submitting = True
            self.export_error = ""

        exporter = session.exporter
        try:
            artifact = await exporter.confirm(reason)
        except ReasonValidationError as exc:
            async with self:
                self.export_error = str(exc)
                self.export_submitting = False
            return

        async with self:
            self.export_submitting = False
            if artifact is not None:
                self.export_open = False
                self.export_reason = ""
            elif exporter.job is not None and exporter.job.error:
                self.export_error = exporter.job.error

        for event in _toasts(session.notifications):
            yield event
        if artifact is not None:
            yield rx.download(data=artifact.data, filename=artifact.file_name)


def _sort_indicator(query: QueryDescriptor, key: str) -> str:
    if not query.sort.active or query.sort.key != key:
        return ""
    return "▲" if query.sort.order == ASC else "▼"


def _selected_options(query: QueryDescriptor, key: str) -> list[str]:
    return [str(value) for value in query.filters.get(key) or []]


def _filter_summary(query: QueryDescriptor, key: str) -> str:
    selected = _selected_options(query, key)
    if not selected:
        return ALL_OPTION
    if len(selected) == 1:
        return selected[0]
    return f"{len(selected)} selected"


def _input_date(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    return str(value)
