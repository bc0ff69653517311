"""Configuration helpers: optional ``.env`` loading and formatter tags.

Purpose
-------
Keep environment handling in one place so the CLI, the façade and host
applications agree on variable names and precedence.

Contents
--------
* :data:`DOTENV_ENV_VAR` / :func:`should_use_dotenv` / :func:`enable_dotenv`.
* :data:`TAGS_ENV_VAR` / :func:`parse_tags` / :func:`resolve_tags`.

System Role
-----------
Outer configuration layer. The formatter core never reads the environment;
callers resolve settings here and pass them to the constructor.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DOTENV_ENV_VAR = "LOG_USE_DOTENV"
TAGS_ENV_VAR = "LOG_ECS_TAGS"

_TRUTHY = {"1", "true", "yes", "on"}
_DOTENV_LOADED: Path | None = None
_DOTENV_ATTEMPTED = False


def should_use_dotenv(*, explicit: bool | None, env_value: str | None) -> bool:
    """Decide whether ``.env`` loading is requested.

    An explicit CLI flag wins over the environment toggle.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value="on")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(explicit=None, env_value=None)
    False
    """
    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv() -> Path | None:
    """Load the nearest ``.env`` (searching upwards from the working directory).

    Existing environment variables keep precedence. The search runs once per
    process; later calls return the path found by the first call.

    Returns
    -------
    Path | None
        Resolved path of the loaded file, ``None`` when no file was found.
    """

    global _DOTENV_LOADED, _DOTENV_ATTEMPTED
    if _DOTENV_ATTEMPTED:
        return _DOTENV_LOADED
    _DOTENV_ATTEMPTED = True
    candidate = find_dotenv(usecwd=True)
    if not candidate:
        logger.debug("No .env file found from %s", Path.cwd())
        return None
    path = Path(candidate).resolve()
    load_dotenv(path, override=False)
    logger.debug("Loaded environment from %s", path)
    _DOTENV_LOADED = path
    return path


def _reset_dotenv_state_for_testing() -> None:
    """Forget previous :func:`enable_dotenv` calls."""

    global _DOTENV_LOADED, _DOTENV_ATTEMPTED
    _DOTENV_LOADED = None
    _DOTENV_ATTEMPTED = False


def parse_tags(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated tag list, dropping blank entries.

    Examples
    --------
    >>> parse_tags("one, two,,three ")
    ('one', 'two', 'three')
    >>> parse_tags(None)
    ()
    """
    if not raw:
        return ()
    return tuple(chunk.strip() for chunk in raw.split(",") if chunk.strip())


def resolve_tags(tags: Iterable[str] | None = None) -> tuple[str, ...] | None:
    """Return the tags to configure, letting ``LOG_ECS_TAGS`` override ``tags``.

    ``None`` is returned when neither source provides tags.
    """

    raw = os.getenv(TAGS_ENV_VAR)
    if raw is not None:
        return parse_tags(raw)
    if tags is None:
        return None
    return tuple(tags)


__all__ = [
    "DOTENV_ENV_VAR",
    "TAGS_ENV_VAR",
    "enable_dotenv",
    "parse_tags",
    "resolve_tags",
    "should_use_dotenv",
]
