"""
Data models for the Record Console.

This package provides:
- Record typing and per-screen field configuration (ListConfig, ExportColumn)
- The query descriptor (search, filters, date range, sort, paging)
- Collaborator outcomes, notifications and export jobs

Reflex-specific view models live in models.reflex_models and are imported
only by the UI layer.
"""

from record_console.models.common import (
    ExportJob,
    ExportStatus,
    MutationOutcome,
    Notification,
    NotificationType,
    Outcome,
    OutcomeKind,
)
from record_console.models.query import (
    ASC,
    DESC,
    DateRange,
    QueryDescriptor,
    SortSpec,
)
from record_console.models.records import (
    ExportColumn,
    FieldKind,
    Identity,
    ListConfig,
    Record,
    RecordListResult,
)

__all__ = [
    "ASC",
    "DESC",
    "DateRange",
    "ExportColumn",
    "ExportJob",
    "ExportStatus",
    "FieldKind",
    "Identity",
    "ListConfig",
    "MutationOutcome",
    "Notification",
    "NotificationType",
    "Outcome",
    "OutcomeKind",
    "QueryDescriptor",
    "Record",
    "RecordListResult",
    "SortSpec",
]
