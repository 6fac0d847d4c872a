"""
Demo implementation of RecordService using in-memory data.

This service is useful for:
- Local development without a backend
- Testing the list engine with realistic records
- Demonstrating the console without any infrastructure

Records are deep-copied on the way in and out, so callers can never mutate
the store through a returned record, exactly like a remote backend.
"""

import asyncio
import copy
from typing import Any, Iterable, Mapping, Sequence

from record_console.lib import logs
from record_console.models.common import MutationOutcome
from record_console.models.records import Identity, Record, RecordListResult
from record_console.services.record_service import RecordService
from record_console.utils import fold

LOG = logs.logger(__file__)


class DemoRecordService(RecordService):
    """
    In-memory record service.

    Args:
        records: Initial records.
        id_field: Name of the identity field.
        unique_fields: Fields whose case-folded value must be unique; a
            conflicting create/update yields a "Duplicate entry" business
            error.
        latency: Seconds each call sleeps, to make loading states visible.
    """

    def __init__(
        self,
        records: Sequence[Record] = (),
        id_field: str = "id",
        unique_fields: Sequence[str] = (),
        latency: float = 0.0,
    ) -> None:
        self.id_field = id_field
        self.unique_fields = tuple(unique_fields)
        self.latency = latency
        self._records: dict[Identity, dict] = {}
        for record in records:
            self._records[record[id_field]] = copy.deepcopy(dict(record))

    async def list_records(
        self, filters: Mapping[str, Any] | None = None
    ) -> RecordListResult:
        await self._pause()
        records = [copy.deepcopy(record) for record in self._records.values()]
        if filters:
            records = [
                record
                for record in records
                if all(record.get(key) == value for key, value in filters.items())
            ]
        return RecordListResult(records=records, total=len(records))

    async def create_record(self, payload: Record) -> MutationOutcome:
        await self._pause()
        record = copy.deepcopy(dict(payload))
        identity = record.get(self.id_field)
        if identity is None:
            identity = self._next_id()
            record[self.id_field] = identity
        elif identity in self._records:
            return MutationOutcome.business_error(
                "Duplicate entry", affected_id=identity
            )
        if conflict := self._unique_conflict(record):
            return MutationOutcome.business_error(conflict, affected_id=identity)
        self._records[identity] = record
        LOG.info("Created record %s", identity)
        return MutationOutcome.success(affected_id=identity)

    async def update_record(self, payload: Record) -> MutationOutcome:
        await self._pause()
        identity = payload.get(self.id_field)
        if identity not in self._records:
            return MutationOutcome.business_error(
                "Record not found", affected_id=identity
            )
        record = {**self._records[identity], **copy.deepcopy(dict(payload))}
        if conflict := self._unique_conflict(record):
            return MutationOutcome.business_error(conflict, affected_id=identity)
        self._records[identity] = record
        LOG.info("Updated record %s", identity)
        return MutationOutcome.success(affected_id=identity)

    async def delete_record(self, identity: Identity) -> MutationOutcome:
        await self._pause()
        if self._records.pop(identity, None) is None:
            return MutationOutcome.business_error(
                "Record not found", affected_id=identity
            )
        LOG.info("Deleted record %s", identity)
        return MutationOutcome.success(affected_id=identity)

    async def delete_records(self, identities: Iterable[Identity]) -> MutationOutcome:
        """Delete all given records, or none if any of them is missing."""
        await self._pause()
        targets = list(identities)
        missing = [identity for identity in targets if identity not in self._records]
        if missing:
            return MutationOutcome.business_error(
                f"Record not found: {', '.join(str(i) for i in missing)}"
            )
        for identity in targets:
            del self._records[identity]
        LOG.info("Deleted %s record(s)", len(targets))
        return MutationOutcome.success(message=f"{len(targets)} record(s) deleted.")

    def _next_id(self) -> int:
        numeric = [key for key in self._records if isinstance(key, int)]
        return max(numeric, default=0) + 1

    def _unique_conflict(self, record: Mapping[str, Any]) -> str | None:
        identity = record.get(self.id_field)
        for name in self.unique_fields:
            value = fold(record.get(name))
            if not value:
                continue
            for other_id, other in self._records.items():
                if other_id != identity and fold(other.get(name)) == value:
                    return "Duplicate entry"
        return None

    async def _pause(self) -> None:
        if self.latency > 0:
            await asyncio.sleep(self.latency)
