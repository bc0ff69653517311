"""Adapters rendering log events as ECS documents."""

from __future__ import annotations

from .ecs_formatter import CONTRIBUTOR_KEYS, ECS_VERSION, EcsFormatter
from .logging_bridge import EcsLogFormatter, event_from_log_record

__all__ = [
    "CONTRIBUTOR_KEYS",
    "ECS_VERSION",
    "EcsFormatter",
    "EcsLogFormatter",
    "event_from_log_record",
]
