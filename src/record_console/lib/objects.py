"""
Object utilities for fingerprinting and JSON serialization.

Query descriptors are persisted by the UI as JSON and compared by
fingerprint, so both helpers must be stable across Python sessions.
"""

import hashlib
import json
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from typing import Any


def fingerprint(obj: Any) -> str:
    """
    Return a stable sha256 hex digest of an object.

    Objects are serialized to JSON with sorted keys before hashing, so two
    equal mappings always produce the same digest.

    Args:
        obj: Any JSON-serializable object (dataclasses are converted).

    Returns:
        Hexadecimal digest string.
    """
    json_str = json.dumps(obj, sort_keys=True, default=_default_serializer)
    return hashlib.sha256(json_str.encode("utf-8")).hexdigest()


def to_json(obj: Any, indent: int | None = None) -> str:
    """
    Serialize an object to JSON string.

    Handles dataclasses by converting them to dictionaries first.
    Falls back to str() for non-serializable objects.

    Args:
        obj: Object to serialize.
        indent: Optional indentation for pretty printing.

    Returns:
        JSON string representation.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        obj = asdict(obj)
    return json.dumps(obj, default=_default_serializer, indent=indent)


def _default_serializer(obj: Any) -> Any:
    """Default serializer for values the json module cannot encode."""
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    return str(obj)
