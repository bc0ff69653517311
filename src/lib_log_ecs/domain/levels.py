"""Log level abstraction covering the RFC 5424 severities.

Purpose
-------
Offer a domain-specific representation of log severities that extends the
stdlib levels with ``NOTICE``, ``ALERT`` and ``EMERGENCY`` so records produced
by syslog-style hosts can be described without losing information.

Contents
--------
* :class:`LogLevel` enum with conversion helpers.

System Role
-----------
Used by :class:`lib_log_ecs.domain.events.LogEvent` to derive a level name when
a host only supplies the numeric ordinal. The ECS formatter itself always
writes the level name exactly as supplied by the record.
"""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(Enum):
    """Enumerated logging levels ordered on the stdlib numeric scale."""

    DEBUG = 10
    INFO = 20
    NOTICE = 25
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    ALERT = 60
    EMERGENCY = 70

    def to_python_level(self) -> int:
        """Return the integer understood by :mod:`logging` for this level.

        Examples
        --------
        >>> LogLevel.ERROR.to_python_level() == logging.ERROR
        True
        >>> LogLevel.NOTICE.to_python_level()
        25
        """

        return self.value

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib logging level integer into :class:`LogLevel`."""
        return cls.from_numeric(level)

    @classmethod
    def from_numeric(cls, level: int) -> "LogLevel":
        """Return the :class:`LogLevel` corresponding to ``level``.

        Both the stdlib scale and the Monolog/RFC 5424 scale
        (``100`` … ``600``) are understood.

        Examples
        --------
        >>> LogLevel.from_numeric(25)
        <LogLevel.NOTICE: 25>
        >>> LogLevel.from_numeric(550)
        <LogLevel.ALERT: 60>
        """
        if level in _MONOLOG_LEVELS:
            return _MONOLOG_LEVELS[level]
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc


_MONOLOG_LEVELS: dict[int, LogLevel] = {
    100: LogLevel.DEBUG,
    200: LogLevel.INFO,
    250: LogLevel.NOTICE,
    300: LogLevel.WARNING,
    400: LogLevel.ERROR,
    500: LogLevel.CRITICAL,
    550: LogLevel.ALERT,
    600: LogLevel.EMERGENCY,
}


__all__ = ["LogLevel"]
