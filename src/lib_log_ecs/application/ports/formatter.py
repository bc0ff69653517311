"""Port for components that render a log event as a single output line."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_ecs.domain.events import LogEvent


@runtime_checkable
class FormatterPort(Protocol):
    """Render ``event`` into a newline-terminated string."""

    def format(self, event: LogEvent) -> str:
        """Return the rendered representation of ``event``."""


__all__ = ["FormatterPort"]
