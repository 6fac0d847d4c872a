"""
Abstract base class defining the record data access contract.

Every screen of the console talks to its backing store through a
RecordService. The engine assumes list_records() returns the full eligible
set for client-side filtering, sorting and paging.

Mutations return a MutationOutcome instead of raising for business errors;
implementations may still raise for transport failures, which the
mutation-refresh coordinator reports as transport errors.

Implementations:
- DemoRecordService: In-memory records for development and testing
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping

from record_console.models.common import MutationOutcome
from record_console.models.records import Identity, Record, RecordListResult


class RecordService(ABC):
    """
    Abstract base class for record data access.

    Subclasses provide listing and create/update/delete operations for one
    record collection.
    """

    @abstractmethod
    async def list_records(
        self, filters: Mapping[str, Any] | None = None
    ) -> RecordListResult:
        """
        Return every record of the collection.

        Args:
            filters: Optional server-side constraints (not used by the engine,
                which filters client-side).
        """

    @abstractmethod
    async def create_record(self, payload: Record) -> MutationOutcome:
        """Create a record from the payload."""

    @abstractmethod
    async def update_record(self, payload: Record) -> MutationOutcome:
        """Update the record identified by the payload's identity field."""

    @abstractmethod
    async def delete_record(self, identity: Identity) -> MutationOutcome:
        """Delete one record."""

    async def delete_records(self, identities: Iterable[Identity]) -> MutationOutcome:
        """
        Delete several records.

        The default implementation deletes one by one and stops at the first
        failure. Services with a bulk endpoint should override it.
        """
        deleted = 0
        for identity in identities:
            outcome = await self.delete_record(identity)
            if not outcome.ok:
                return outcome
            deleted += 1
        return MutationOutcome.success(message=f"{deleted} record(s) deleted.")
