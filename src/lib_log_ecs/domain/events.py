"""Domain event describing a record handed over by the host logging framework.

Purpose
-------
Provide an immutable representation of one log record so the formatter can
work on plain data instead of framework-specific objects.

Contents
--------
* :class:`LogEvent` dataclass with :meth:`LogEvent.from_dict`.
* Utility functions ``_ensure_aware`` and ``_coerce_timestamp``.

System Role
-----------
Sits in the domain layer; adapters (the stdlib bridge, the CLI, the façade)
translate their own inputs into :class:`LogEvent` before formatting.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from .levels import LogLevel


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    try:
        return ts.astimezone(timezone.utc)
    except OverflowError as exc:
        raise ValueError(f"timestamp {ts!r} cannot be represented in UTC") from exc


def _coerce_timestamp(value: Any) -> datetime:
    """Accept ``datetime`` objects, ISO-8601 strings and POSIX epoch numbers.

    Examples
    --------
    >>> _coerce_timestamp(0).isoformat()
    '1970-01-01T00:00:00+00:00'
    >>> _coerce_timestamp("1970-01-01T00:00:00Z").year
    1970
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Unsupported timestamp value: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise ValueError(f"timestamp {value!r} cannot be represented") from exc
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValueError(f"Invalid ISO-8601 timestamp: {value!r}") from exc
    raise ValueError(f"Unsupported timestamp value: {value!r}")


@dataclass(slots=True, frozen=True)
class LogEvent:
    """Immutable log record consumed by the ECS formatter.

    Attributes
    ----------
    level:
        Numeric severity ordinal. A :class:`LogLevel` is accepted and stored as
        its value.
    level_name:
        Severity name written verbatim to ``log.level``. Derived from
        :class:`LogLevel` when left empty.
    channel:
        Logger/channel name emitted as ``log.logger``.
    timestamp:
        Time of the event, timezone-aware, normalised to UTC.
    message:
        Message text; no template interpolation happens downstream.
    context:
        Caller-supplied attributes, possibly holding typed contributors.
    extra:
        Attributes added by host processors; always folded into labels.
    """

    level: int
    level_name: str
    channel: str
    timestamp: datetime
    message: str
    context: Mapping[str, Any] = field(default_factory=dict)
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        level = self.level
        if isinstance(level, LogLevel):
            object.__setattr__(self, "level", level.value)
            if not self.level_name:
                object.__setattr__(self, "level_name", level.name)
        elif not self.level_name:
            object.__setattr__(self, "level_name", LogLevel.from_numeric(level).name)
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        object.__setattr__(self, "context", dict(self.context))
        object.__setattr__(self, "extra", dict(self.extra))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "LogEvent":
        """Build an event from a host record mapping.

        The mapping uses the keys ``level``, ``level_name``, ``channel``,
        ``datetime``, ``message``, ``context`` and ``extra``. Only ``level``,
        ``channel`` and ``datetime`` are mandatory.

        Examples
        --------
        >>> event = LogEvent.from_dict({"level": 25, "channel": "app", "datetime": 0, "message": "hi"})
        >>> event.level_name, event.channel, event.timestamp.year
        ('NOTICE', 'app', 1970)
        """

        missing = [key for key in ("level", "channel", "datetime") if key not in payload]
        if missing:
            raise ValueError("Record is missing required fields: " + ", ".join(missing))
        level = payload["level"]
        if isinstance(level, str):
            level = LogLevel.from_name(level)
        return cls(
            level=level,
            level_name=str(payload.get("level_name") or ""),
            channel=str(payload["channel"]),
            timestamp=_coerce_timestamp(payload["datetime"]),
            message=str(payload.get("message", "")),
            context=payload.get("context") or {},
            extra=payload.get("extra") or {},
        )

    def replace(self, **changes: Any) -> "LogEvent":
        """Return a copied event with ``changes`` applied."""

        return replace(self, **changes)


__all__ = ["LogEvent"]
