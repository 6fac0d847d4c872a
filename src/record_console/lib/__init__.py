"""
Local library modules shared across the console.

Modules:
    logs: Logging utilities
    objects: Object hashing and JSON serialization
    sessions: Bounded in-memory per-session store
"""

from record_console.lib import logs, objects, sessions

__all__ = ["logs", "objects", "sessions"]
