"""Helpers that turn free-form attributes into ECS ``labels`` entries.

Purpose
-------
ECS reserves dots for field nesting and treats ``*`` and ``\\`` specially in
queries, so attribute keys must be rewritten before they land under
``labels``. Values must survive JSON serialisation without loss.

Contents
--------
* :func:`sanitize_label_key` – schema-safe key rewriting.
* :func:`normalise_label_value` – JSON-safe value conversion.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Set as AbstractSet
from datetime import date, datetime, time
from enum import Enum
from typing import Any

_ASCII_WHITESPACE = " \t\n\r\x0b\x0c"
_KEY_TRANSLATION = str.maketrans({" ": "_", ".": "_", "*": "_", "\\": "_"})


def sanitize_label_key(key: str) -> str:
    """Return ``key`` trimmed and with `` ``, ``.``, ``*`` and ``\\`` replaced by ``_``.

    Consecutive replacements are not collapsed and case is preserved, which
    keeps the function idempotent.

    Examples
    --------
    >>> sanitize_label_key(" a.b*c\\\\d ")
    'a_b_c_d'
    >>> sanitize_label_key(".hello")
    '_hello'
    >>> sanitize_label_key("")
    ''
    """

    return key.strip(_ASCII_WHITESPACE).translate(_KEY_TRANSLATION)


def normalise_label_value(value: Any) -> Any:
    """Convert ``value`` into data :func:`json.dumps` renders without loss.

    A container that holds itself is cut at the repeat with ``"[...]"`` or
    ``"{...}"``, the way :func:`repr` shows it.

    Examples
    --------
    >>> normalise_label_value({"ids": (1, 2), 3: float("nan")})
    {'ids': [1, 2], '3': 'nan'}
    >>> normalise_label_value(KeyError("missing"))
    {'type': 'KeyError', 'message': "'missing'"}
    >>> loop = [1]
    >>> loop.append(loop)
    >>> normalise_label_value(loop)
    [1, '[...]']
    """

    return _normalise(value, frozenset())


def _normalise(value: Any, active: frozenset[int]) -> Any:
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else repr(value)
    if isinstance(value, Enum):
        return _normalise(value.value, active)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, BaseException):
        return {"type": type(value).__name__, "message": str(value)}
    if isinstance(value, Mapping):
        if id(value) in active:
            return "{...}"
        inner = active | {id(value)}
        return {str(key): _normalise(item, inner) for key, item in value.items()}
    if isinstance(value, (list, tuple, AbstractSet)):
        if id(value) in active:
            return "[...]"
        inner = active | {id(value)}
        return [_normalise(item, inner) for item in value]
    return str(value)


__all__ = ["normalise_label_value", "sanitize_label_key"]
