from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

import pytest

from lib_log_ecs.domain.events import LogEvent
from lib_log_ecs.domain.levels import LogLevel

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def event_factory() -> Callable[..., LogEvent]:
    """Build INFO events on the ``ecs`` channel at the Unix epoch, with overrides."""

    def _factory(overrides: dict[str, Any] | None = None) -> LogEvent:
        fields: dict[str, Any] = {
            "level": LogLevel.INFO.value,
            "level_name": "INFO",
            "channel": "ecs",
            "timestamp": EPOCH,
            "message": "a1b2c3d4",
            "context": {},
            "extra": {},
        }
        if overrides:
            fields.update(overrides)
        return LogEvent(**fields)

    return _factory


@pytest.fixture
def epoch() -> datetime:
    return EPOCH
