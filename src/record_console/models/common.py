"""
Common models shared by the engine and its collaborators.

This module defines the transient objects that flow between the engine,
the record service, the audit log and the notification sink:

- Outcome / MutationOutcome: results of collaborator calls
- Notification: user-facing success/error/info messages
- ExportJob: the state of one reason-gated export attempt

All models include to_dict methods so they can be logged or handed to the
UI layer as plain JSON.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from record_console.models.records import Identity, Record


class OutcomeKind(str, Enum):
    """Classification of a collaborator call result."""

    SUCCESS = "success"
    BUSINESS_ERROR = "businessError"
    TRANSPORT_ERROR = "transportError"


@dataclass
class Outcome:
    """
    Result of a call to a collaborator (record service or audit log).

    Attributes:
        kind: success, businessError (the server rejected the request) or
            transportError (the request never got a structured answer).
        message: Server-provided message, if any.
    """

    kind: OutcomeKind = OutcomeKind.SUCCESS
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @classmethod
    def success(cls, message: str | None = None, **kwargs: Any):
        return cls(kind=OutcomeKind.SUCCESS, message=message, **kwargs)

    @classmethod
    def business_error(cls, message: str, **kwargs: Any):
        return cls(kind=OutcomeKind.BUSINESS_ERROR, message=message, **kwargs)

    @classmethod
    def transport_error(cls, message: str | None = None, **kwargs: Any):
        return cls(kind=OutcomeKind.TRANSPORT_ERROR, message=message, **kwargs)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}


@dataclass
class MutationOutcome(Outcome):
    """Outcome of a create/update/delete call."""

    affected_id: Identity | None = None

    def to_dict(self) -> dict:
        return {**Outcome.to_dict(self), "affected_id": self.affected_id}


class NotificationType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass
class Notification:
    """A fire-and-forget message for the user."""

    type: NotificationType
    text: str
    title: str | None = None

    def to_dict(self) -> dict:
        return {"type": self.type.value, "text": self.text, "title": self.title}


class ExportStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class ExportJob:
    """
    State of one export attempt.

    Created fresh each time the user requests an export and discarded once it
    completes or is cancelled. `rows` is a deep copy taken at request time so
    a concurrent reload cannot change what gets exported.

    Attributes:
        module_name: Name of the screen being exported (sent to the audit log).
        file_name: Name of the produced file.
        rows: Snapshot of the filtered and sorted records.
        reason: Justification entered by the user (kept across failed submits).
        status: idle, submitting, succeeded or failed.
        error: Message of the last failed submit.
    """

    module_name: str
    file_name: str
    rows: list[Record] = field(default_factory=list)
    reason: str = ""
    status: ExportStatus = ExportStatus.IDLE
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "module_name": self.module_name,
            "file_name": self.file_name,
            "row_count": len(self.rows),
            "reason": self.reason,
            "status": self.status.value,
            "error": self.error,
        }
