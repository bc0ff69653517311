"""Convenience façade over the ECS formatter.

Purpose
-------
Offer one-call helpers for hosts that hand over records as plain mappings
(``level``, ``level_name``, ``channel``, ``datetime``, ``message``,
``context``, ``extra``) and for the CLI metadata banner.

Contents
--------
* :func:`format_record` - mapping in, ECS line out.
* :func:`summary_info` - metadata banner used by ``lib_log_ecs info``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .adapters.ecs_formatter import EcsFormatter
from .domain.events import LogEvent


def format_record(record: Mapping[str, Any], *, tags: Iterable[str] | None = None) -> str:
    """Format a host record mapping as an ECS JSON line.

    Parameters
    ----------
    record:
        Mapping in the shape accepted by :meth:`LogEvent.from_dict`.
    tags:
        Optional static tags written to ``tags``.

    Raises
    ------
    ValueError
        When the record is incomplete, the timestamp cannot be represented or
        the tags are malformed.

    Examples
    --------
    >>> line = format_record({"level": 20, "level_name": "INFO", "channel": "ecs", "datetime": 0, "message": "m"})
    >>> line.startswith('{"@timestamp":"1970-01-01T00:00:00.000000Z"') and line.endswith("\\n")
    True
    """

    return EcsFormatter(tags).format(LogEvent.from_dict(record))


def summary_info() -> str:
    """Return the metadata banner used by the CLI entry point.

    Examples
    --------
    >>> banner = summary_info()
    >>> "version" in banner
    True
    """
    from . import __init__conf__

    lines: list[str] = []

    def _capture(text: str) -> None:
        lines.append(text)

    __init__conf__.print_info(writer=_capture)
    return "".join(lines)


__all__ = ["format_record", "summary_info"]
