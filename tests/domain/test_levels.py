from __future__ import annotations

import logging

import pytest

from lib_log_ecs.domain.levels import LogLevel


@pytest.mark.parametrize(
    "name, expected",
    [
        ("debug", LogLevel.DEBUG),
        ("INFO", LogLevel.INFO),
        ("Notice", LogLevel.NOTICE),
        ("Warning", LogLevel.WARNING),
        ("error", LogLevel.ERROR),
        ("CRITICAL", LogLevel.CRITICAL),
        (" alert ", LogLevel.ALERT),
        ("EMERGENCY", LogLevel.EMERGENCY),
    ],
)
def test_from_name_accepts_case_insensitive_matches(name: str, expected: LogLevel) -> None:
    assert LogLevel.from_name(name) is expected


def test_from_name_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        LogLevel.from_name("verbose")


@pytest.mark.parametrize(
    "number, expected",
    [
        (10, LogLevel.DEBUG),
        (20, LogLevel.INFO),
        (25, LogLevel.NOTICE),
        (30, LogLevel.WARNING),
        (40, LogLevel.ERROR),
        (50, LogLevel.CRITICAL),
        (60, LogLevel.ALERT),
        (70, LogLevel.EMERGENCY),
    ],
)
def test_from_numeric_maps_known_levels(number: int, expected: LogLevel) -> None:
    assert LogLevel.from_numeric(number) is expected


@pytest.mark.parametrize(
    "number, expected",
    [
        (100, LogLevel.DEBUG),
        (200, LogLevel.INFO),
        (250, LogLevel.NOTICE),
        (300, LogLevel.WARNING),
        (400, LogLevel.ERROR),
        (500, LogLevel.CRITICAL),
        (550, LogLevel.ALERT),
        (600, LogLevel.EMERGENCY),
    ],
)
def test_from_numeric_maps_monolog_levels(number: int, expected: LogLevel) -> None:
    assert LogLevel.from_numeric(number) is expected


@pytest.mark.parametrize("number", [-5, 5, 15, 35, 45, 55, 150, 700])
def test_from_numeric_rejects_unknown_levels(number: int) -> None:
    with pytest.raises(ValueError, match="Unsupported log level numeric"):
        LogLevel.from_numeric(number)


@pytest.mark.parametrize(
    "level, expected",
    [
        (logging.DEBUG, LogLevel.DEBUG),
        (logging.INFO, LogLevel.INFO),
        (logging.WARNING, LogLevel.WARNING),
        (logging.ERROR, LogLevel.ERROR),
        (logging.CRITICAL, LogLevel.CRITICAL),
    ],
)
def test_from_python_level_delegates_to_numeric(level: int, expected: LogLevel) -> None:
    assert LogLevel.from_python_level(level) is expected


@pytest.mark.parametrize("level", [LogLevel.DEBUG, LogLevel.INFO, LogLevel.WARNING, LogLevel.ERROR, LogLevel.CRITICAL])
def test_to_python_level_returns_logging_constant(level: LogLevel) -> None:
    assert level.to_python_level() == getattr(logging, level.name)
