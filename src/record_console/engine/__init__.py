"""
List-view data engine.

This package provides:
- pipeline: Pure filter -> search -> sort -> paginate transformation
- selection: Identity-keyed selection that survives paging and sorting
- export: Reason-gated CSV export workflow
- refresh: Mutation-refresh coordinator (reload after every mutation)
- list_view: One engine instance per screen tying the pieces together
"""

from record_console.engine.export import (
    ExportArtifact,
    ExportController,
    ExportPhase,
    ReasonValidationError,
    export_file_name,
    serialize_csv,
    validate_reason,
)
from record_console.engine.list_view import ListView
from record_console.engine.pipeline import PipelineResult, distinct_values, run_pipeline
from record_console.engine.refresh import MutationRefreshCoordinator
from record_console.engine.selection import SelectionManager

__all__ = [
    "ExportArtifact",
    "ExportController",
    "ExportPhase",
    "ListView",
    "MutationRefreshCoordinator",
    "PipelineResult",
    "ReasonValidationError",
    "SelectionManager",
    "distinct_values",
    "export_file_name",
    "run_pipeline",
    "serialize_csv",
    "validate_reason",
]
