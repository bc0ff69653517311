"""Domain entities and value objects used by the ECS formatter."""

from __future__ import annotations

from .document import EcsDocument, FieldConflictError
from .events import LogEvent
from .labels import normalise_label_value, sanitize_label_key
from .levels import LogLevel
from .types import Error, Service, Tracing, User

__all__ = [
    "EcsDocument",
    "Error",
    "FieldConflictError",
    "LogEvent",
    "LogLevel",
    "Service",
    "Tracing",
    "User",
    "normalise_label_value",
    "sanitize_label_key",
]
