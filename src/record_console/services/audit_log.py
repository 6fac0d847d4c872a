"""
Audit log collaborator that records export justifications.

Exports are a compliance-sensitive operation: before any file is produced
the user's reason is submitted to the audit log, and the export only
proceeds when the submission succeeds.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone

from record_console.lib import logs
from record_console.models.common import Outcome

LOG = logs.logger(__file__)


class AuditLog(ABC):
    """Abstract base class for the export reason log."""

    @abstractmethod
    async def submit_reason(
        self, reason: str, module_name: str, file_name: str
    ) -> Outcome:
        """
        Record why an export is being made.

        Args:
            reason: Justification entered by the user.
            module_name: Screen the export belongs to.
            file_name: Name of the file about to be produced.

        Returns:
            Outcome; anything but success blocks the export.
        """


@dataclass(slots=True)
class AuditEntry:
    """One submitted export reason."""

    reason: str
    module_name: str
    file_name: str
    submitted_at: datetime


class DemoAuditLog(AuditLog):
    """In-memory audit log that keeps every submitted entry."""

    def __init__(self) -> None:
        self.entries: list[AuditEntry] = []

    async def submit_reason(
        self, reason: str, module_name: str, file_name: str
    ) -> Outcome:
        entry = AuditEntry(
            reason=reason,
            module_name=module_name,
            file_name=file_name,
            submitted_at=datetime.now(timezone.utc),
        )
        self.entries.append(entry)
        LOG.info("Export reason recorded - module:%s file:%s", module_name, file_name)
        return Outcome.success()
