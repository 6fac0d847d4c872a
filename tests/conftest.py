"""Shared fixtures and fakes for the record console tests."""

from typing import Any, Iterable, Mapping

import pytest

from record_console.engine.list_view import ListView
from record_console.models.common import MutationOutcome, Outcome
from record_console.models.records import (
    ExportColumn,
    FieldKind,
    ListConfig,
    RecordListResult,
)
from record_console.services.audit_log import AuditLog
from record_console.services.notifications import CollectingNotificationSink
from record_console.services.record_service import RecordService


class FakeRecordService(RecordService):
    """
    Record service with scripted mutation outcomes.

    Every call is appended to `calls`; mutations return the next entry of
    `outcomes` (success when exhausted). An entry that is an exception
    instance is raised instead.
    """

    def __init__(self, records: Iterable[Mapping[str, Any]] = ()) -> None:
        self.records = [dict(record) for record in records]
        self.outcomes: list[Any] = []
        self.calls: list[tuple] = []
        self.list_error: Exception | None = None

    async def list_records(self, filters=None) -> RecordListResult:
        self.calls.append(("list_records",))
        if self.list_error is not None:
            raise self.list_error
        return RecordListResult(records=[dict(record) for record in self.records])

    async def create_record(self, payload) -> MutationOutcome:
        self.calls.append(("create_record", dict(payload)))
        outcome = self._next()
        if outcome.ok:
            self.records.append(dict(payload))
        return outcome

    async def update_record(self, payload) -> MutationOutcome:
        self.calls.append(("update_record", dict(payload)))
        outcome = self._next()
        if outcome.ok:
            for record in self.records:
                if record["id"] == payload["id"]:
                    record.update(payload)
        return outcome

    async def delete_record(self, identity) -> MutationOutcome:
        self.calls.append(("delete_record", identity))
        outcome = self._next()
        if outcome.ok:
            self.records = [r for r in self.records if r["id"] != identity]
        return outcome

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def _next(self) -> MutationOutcome:
        if not self.outcomes:
            return MutationOutcome.success()
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeAuditLog(AuditLog):
    """Audit log returning scripted outcomes and recording submissions."""

    def __init__(self, outcome: Outcome | Exception | None = None) -> None:
        self.outcome = outcome or Outcome.success()
        self.submissions: list[tuple[str, str, str]] = []
        self.on_submit = None

    async def submit_reason(self, reason, module_name, file_name) -> Outcome:
        self.submissions.append((reason, module_name, file_name))
        if self.on_submit is not None:
            self.on_submit()
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


@pytest.fixture
def two_records() -> list[dict]:
    return [
        {"id": 1, "status": "New", "createdAt": "2024-01-01"},
        {"id": 2, "status": "Won", "createdAt": "2024-02-01"},
    ]


@pytest.fixture
def leads() -> list[dict]:
    return [
        {
            "id": 1,
            "name": "Acme rollout",
            "status": "New",
            "value": 1200,
            "created_at": "2024-01-05T09:30:00Z",
            "owner": {"name": "Dana"},
            "tags": ["priority", "enterprise"],
        },
        {
            "id": 2,
            "name": "Globex renewal",
            "status": "Won",
            "value": 800,
            "created_at": "2024-01-31T23:59:00Z",
            "owner": {"name": "Lee"},
            "tags": [],
        },
        {
            "id": 3,
            "name": "Initech pilot",
            "status": "Lost",
            "value": None,
            "created_at": "2024-02-01T00:00:00Z",
            "owner": None,
            "tags": ["pilot"],
        },
        {
            "id": 4,
            "name": "Umbrella upsell",
            "status": "Won",
            "value": 5000,
            "created_at": None,
            "owner": {"name": "Dana"},
            "tags": ["enterprise"],
        },
        {
            "id": 5,
            "name": "Hooli expansion",
            "status": "New",
            "value": 800,
            "created_at": "not a date",
            "owner": {"name": "Sam"},
            "tags": None,
        },
    ]


@pytest.fixture
def lead_config() -> ListConfig:
    return ListConfig(
        id_field="id",
        searchable_fields=("name", "status", "owner.name", "tags"),
        timestamp_field="created_at",
        field_kinds={"value": FieldKind.NUMBER, "created_at": FieldKind.DATE},
    )


@pytest.fixture
def columns() -> list[ExportColumn]:
    return [
        ExportColumn("ID", "id"),
        ExportColumn("Name", "name"),
        ExportColumn("Notes", "notes"),
    ]


@pytest.fixture
def notifications() -> CollectingNotificationSink:
    return CollectingNotificationSink()


@pytest.fixture
def service(two_records) -> FakeRecordService:
    return FakeRecordService(two_records)


@pytest.fixture
def view(two_records) -> ListView:
    return ListView(ListConfig(timestamp_field="createdAt"), records=two_records)
