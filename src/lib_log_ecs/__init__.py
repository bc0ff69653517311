"""Public package surface of the ECS log formatter.

Typical use with the standard library::

    import logging
    from lib_log_ecs import EcsLogFormatter, Tracing

    handler = logging.StreamHandler()
    handler.setFormatter(EcsLogFormatter(tags=["api"]))
    logging.getLogger("app").addHandler(handler)
    logging.getLogger("app").warning("slow", extra={"tracing": Tracing("t-1", "x-1")})

Hosts that already own their records build a :class:`LogEvent` and call
:meth:`EcsFormatter.format` directly.
"""

from __future__ import annotations

from .adapters import CONTRIBUTOR_KEYS, ECS_VERSION, EcsFormatter, EcsLogFormatter, event_from_log_record
from .domain import (
    EcsDocument,
    Error,
    FieldConflictError,
    LogEvent,
    LogLevel,
    Service,
    Tracing,
    User,
    sanitize_label_key,
)
from .lib_log_ecs import format_record, summary_info

__all__ = [
    "CONTRIBUTOR_KEYS",
    "ECS_VERSION",
    "EcsDocument",
    "EcsFormatter",
    "EcsLogFormatter",
    "Error",
    "FieldConflictError",
    "LogEvent",
    "LogLevel",
    "Service",
    "Tracing",
    "User",
    "event_from_log_record",
    "format_record",
    "sanitize_label_key",
    "summary_info",
]
