"""Bridge between :mod:`logging` records and the ECS formatter.

Purpose
-------
Let applications that log through the standard library emit ECS documents by
installing :class:`EcsLogFormatter` on any handler.

Contents
--------
* :func:`event_from_log_record` - translate a :class:`logging.LogRecord`.
* :class:`EcsLogFormatter` - :class:`logging.Formatter` subclass.

System Role
-----------
Outer adapter: the host framework owns the record lifecycle and the handler
I/O, this module only converts records on the way through.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from lib_log_ecs.domain.events import LogEvent
from lib_log_ecs.domain.types import Error

from .ecs_formatter import EcsFormatter

_DEFAULT_RECORD_ATTRS: frozenset[str] = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()) | {
    "message",
    "asctime",
    "taskName",
}
# Attributes every LogRecord carries; anything else arrived via ``extra=``.


def event_from_log_record(record: logging.LogRecord) -> LogEvent:
    """Translate ``record`` into a :class:`LogEvent`.

    Attributes passed through ``extra=`` become the event context, so typed
    values bound under ``tracing``/``service``/``user``/``error`` are
    recognised. An exception carried by ``exc_info`` is wrapped as
    :class:`Error` under ``error`` unless the caller already supplied one.

    Examples
    --------
    >>> record = logging.LogRecord("app", logging.INFO, __file__, 1, "hi %s", ("there",), None)
    >>> record.__dict__["request_id"] = "r-1"
    >>> event = event_from_log_record(record)
    >>> event.message, event.level_name, dict(event.context)
    ('hi there', 'INFO', {'request_id': 'r-1'})
    """

    context: dict[str, Any] = {
        key: value for key, value in record.__dict__.items() if key not in _DEFAULT_RECORD_ATTRS
    }
    exc_info = record.exc_info
    if exc_info and exc_info[1] is not None and "error" not in context:
        context["error"] = Error(exc_info[1])
    return LogEvent(
        level=record.levelno,
        level_name=record.levelname,
        channel=record.name,
        timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
        message=record.getMessage(),
        context=context,
    )


class EcsLogFormatter(logging.Formatter):
    """:class:`logging.Formatter` emitting one ECS document per record.

    The trailing newline of :meth:`EcsFormatter.format` is dropped because
    stream and file handlers append their own terminator.

    Parameters
    ----------
    tags:
        Optional static tags forwarded to :class:`EcsFormatter`.
    """

    def __init__(self, tags: Iterable[str] | None = None) -> None:
        super().__init__()
        self._formatter = EcsFormatter(tags)

    def format(self, record: logging.LogRecord) -> str:
        return self._formatter.format(event_from_log_record(record)).rstrip("\n")


__all__ = ["EcsLogFormatter", "event_from_log_record"]
