"""
Reason-gated CSV export.

An export runs as a two-phase commit: the user's justification is first
recorded by the audit log, and only after that succeeds are the rows
serialized and handed back for saving. The controller walks through

    idle -> reason_pending -> submitting -> serializing -> idle

A failed submission returns to reason_pending with the reason kept so the
user can retry without retyping it. Cancelling discards the job; a
submission still in flight when the job is cancelled never produces a file.

The CSV format is UTF-8 with a leading byte-order mark (so spreadsheet tools
detect the encoding), `,` between fields, `\\n` between records and RFC 4180
quoting.
"""

import copy
import csv
import io
import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Sequence

from record_console.lib import logs
from record_console.models.common import ExportJob, ExportStatus, OutcomeKind
from record_console.models.records import ExportColumn, Record
from record_console.services.audit_log import AuditLog
from record_console.services.notifications import NotificationSink

LOG = logs.logger(__file__)

REASON_MIN_LENGTH = 10
REASON_MAX_LENGTH = 255
BOM = "\ufeff"

_SUBMIT_FAILED = "Could not submit the export reason. Please try again."


class ReasonValidationError(ValueError):
    """Raised when an export reason is too short or too long."""


class ExportPhase(str, Enum):
    IDLE = "idle"
    REASON_PENDING = "reason_pending"
    SUBMITTING = "submitting"
    SERIALIZING = "serializing"


def validate_reason(reason: str | None) -> str:
    """
    Check an export reason and return it stripped.

    Raises:
        ReasonValidationError: If the stripped reason is not 10-255 characters.
    """
    text = (reason or "").strip()
    if len(text) < REASON_MIN_LENGTH:
        raise ReasonValidationError(
            f"Reason must be at least {REASON_MIN_LENGTH} characters."
        )
    if len(text) > REASON_MAX_LENGTH:
        raise ReasonValidationError(
            f"Reason cannot exceed {REASON_MAX_LENGTH} characters."
        )
    return text


def export_file_name(module_name: str, on: date | None = None) -> str:
    """Return `<module>_export_<YYYY-MM-DD>.csv` for a module name."""
    slug = re.sub(r"[^0-9a-z]+", "_", module_name.lower()).strip("_") or "records"
    return f"{slug}_export_{(on or date.today()).isoformat()}.csv"


def serialize_csv(rows: Sequence[Record], columns: Sequence[ExportColumn]) -> str:
    """
    Serialize records to CSV text.

    Args:
        rows: Records in export order.
        columns: Header labels and the field each column reads.

    Returns:
        CSV text starting with a byte-order mark; None values become empty
        fields.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow([column.label for column in columns])
    for row in rows:
        writer.writerow([_cell(column.value(row)) for column in columns])
    return BOM + buffer.getvalue()


def _cell(value: object) -> object:
    return "" if value is None else value


@dataclass(slots=True)
class ExportArtifact:
    """A produced export file, ready to be downloaded."""

    file_name: str
    content: str
    row_count: int = 0

    @property
    def data(self) -> bytes:
        return self.content.encode("utf-8")


class ExportController:
    """
    Drives one screen's export workflow.

    Args:
        module_name: Screen name recorded by the audit log and used in the
            file name.
        columns: Column mapping of the screen.
        audit_log: Collaborator that records the export reason.
        notifications: Sink for user-facing messages.
        today: Clock used for the file name date.
    """

    def __init__(
        self,
        module_name: str,
        columns: Sequence[ExportColumn],
        audit_log: AuditLog,
        notifications: NotificationSink,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.module_name = module_name
        self.columns = list(columns)
        self.audit_log = audit_log
        self.notifications = notifications
        self._today = today
        self._phase = ExportPhase.IDLE
        self._job: ExportJob | None = None

    @property
    def phase(self) -> ExportPhase:
        return self._phase

    @property
    def job(self) -> ExportJob | None:
        return self._job

    def request(self, rows: Sequence[Record]) -> bool:
        """
        Start an export of the given rows.

        Returns:
            True if the reason dialog should open, False if there was nothing
            to export.
        """
        if not rows:
            self.notifications.info("Nothing to export.", title="No Data")
            self._discard()
            return False
        self._job = ExportJob(
            module_name=self.module_name,
            file_name=export_file_name(self.module_name, self._today()),
            rows=copy.deepcopy(list(rows)),
        )
        self._phase = ExportPhase.REASON_PENDING
        return True

    def cancel(self) -> None:
        """Discard the current job without side effects."""
        if self._job is not None:
            LOG.info("Export cancelled - module:%s", self.module_name)
        self._discard()

    async def confirm(self, reason: str) -> ExportArtifact | None:
        """
        Submit the reason and, once it is recorded, produce the file.

        Args:
            reason: Justification entered by the user.

        Returns:
            The produced artifact, or None when the submission failed, the job
            was cancelled meanwhile, or no export was pending.

        Raises:
            ReasonValidationError: If the reason is invalid. Nothing is sent
                and the controller stays in reason_pending.
        """
        job = self._job
        if job is None or self._phase is not ExportPhase.REASON_PENDING:
            LOG.warning("Export confirm ignored - phase:%s", self._phase.value)
            return None

        job.reason = reason or ""
        text = validate_reason(reason)

        self._phase = ExportPhase.SUBMITTING
        job.status = ExportStatus.SUBMITTING
        job.error = None
        try:
            outcome = await self.audit_log.submit_reason(
                text, job.module_name, job.file_name
            )
        except Exception:
            LOG.error("Export reason submission failed", exc_info=True)
            outcome = None

        if self._job is not job:
            LOG.info("Export cancelled during submission - module:%s", job.module_name)
            return None

        if outcome is None or not outcome.ok:
            message = _SUBMIT_FAILED
            if (
                outcome is not None
                and outcome.kind is OutcomeKind.BUSINESS_ERROR
                and outcome.message
            ):
                message = outcome.message
            job.status = ExportStatus.FAILED
            job.error = message
            self._phase = ExportPhase.REASON_PENDING
            self.notifications.error(message, title="Failed to Submit Reason")
            return None

        self._phase = ExportPhase.SERIALIZING
        try:
            content = serialize_csv(job.rows, self.columns)
        except Exception:
            LOG.error(
                "Export serialization failed - module:%s", job.module_name, exc_info=True
            )
            job.status = ExportStatus.FAILED
            self.notifications.error(
                "Could not create the export file.", title="Export Failed"
            )
            self._discard()
            return None

        job.status = ExportStatus.SUCCEEDED
        artifact = ExportArtifact(job.file_name, content, row_count=len(job.rows))
        LOG.info(
            "Export complete - module:%s file:%s rows:%s",
            job.module_name,
            job.file_name,
            artifact.row_count,
        )
        self.notifications.success(
            f"Data exported to {job.file_name}.", title="Export Successful"
        )
        self._discard()
        return artifact

    def _discard(self) -> None:
        self._job = None
        self._phase = ExportPhase.IDLE
