"""
Service factory for the Record Console.

This module provides get_record_service() and get_audit_log(), which return
the collaborator implementations for a screen based on configuration.

Available Implementations:
- demo: In-memory service seeded with the screen's demo records

Services are cached per screen at the module level, so every request of a
session sees the same store. Configure via the RECORD_CONSOLE_SERVICE
environment variable.
"""

import os
from functools import cache
from typing import Callable, Dict

from record_console.lib import logs
from record_console.screens import ScreenConfig, get_screen
from record_console.services.audit_log import AuditLog, DemoAuditLog
from record_console.services.record_service import RecordService
from record_console.services.record_service_demo import DemoRecordService

LOG = logs.logger(__file__)

_DEMO_LATENCY = float(os.getenv("RECORD_CONSOLE_DEMO_LATENCY", "0.2"))

_SERVICE_REGISTRY: Dict[str, Callable[[ScreenConfig], RecordService]] = {
    "demo": lambda screen: DemoRecordService(
        screen.demo_records,
        id_field=screen.list_config.id_field,
        unique_fields=screen.unique_fields,
        latency=_DEMO_LATENCY,
    ),
}

_AUDIT_REGISTRY: Dict[str, Callable[[], AuditLog]] = {
    "demo": lambda: DemoAuditLog(),
}


def _resolve_kind(kind: str | None) -> str:
    return (kind or os.getenv("RECORD_CONSOLE_SERVICE", "demo")).lower()


@cache
def get_record_service(screen: str, kind: str | None = None) -> RecordService:
    """Return the configured record service for a screen."""
    resolved_kind = _resolve_kind(kind)
    LOG.info(
        "get_record_service - screen:%s kind:%s resolved_kind:%s",
        screen,
        kind,
        resolved_kind,
    )
    try:
        factory = _SERVICE_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown record service kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory(get_screen(screen))


@cache
def get_audit_log(kind: str | None = None) -> AuditLog:
    """Return the configured audit log."""
    resolved_kind = _resolve_kind(kind)
    try:
        factory = _AUDIT_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown audit log kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory()
