"""Incremental builder for ECS output documents.

Purpose
-------
Accumulate fields from several sources (base record fields, typed
contributors, labels, tags) into one nested document without letting a later
source replace an object written by an earlier one.

Contents
--------
* :class:`EcsDocument` – field tree with ``set``/``merge``/``serialize``.
* :class:`FieldConflictError` – raised when two writes target one scalar.

System Role
-----------
Owned by :class:`lib_log_ecs.adapters.ecs_formatter.EcsFormatter`, which
creates one document per ``format`` call.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any


class FieldConflictError(ValueError):
    """Two writes targeted the same scalar field of an :class:`EcsDocument`."""


Path = str | Sequence[str]


def _segments(path: Path) -> tuple[str, ...]:
    if isinstance(path, str):
        segments: tuple[str, ...] = (path,)
    else:
        segments = tuple(path)
    if not segments:
        raise ValueError("field path must not be empty")
    return segments


class EcsDocument:
    """Nested mapping of ECS fields.

    A string path is one literal key, so ``"log.level"`` stays a flat
    top-level field while ``("log", "logger")`` nests under ``log``.

    Examples
    --------
    >>> doc = EcsDocument()
    >>> doc.set("log.level", "INFO")
    >>> doc.set(("log", "logger"), "app")
    >>> doc.merge({"log": {"origin": {"file": {"line": 7}}}})
    >>> doc.serialize()
    '{"log.level":"INFO","log":{"logger":"app","origin":{"file":{"line":7}}}}\\n'
    """

    def __init__(self) -> None:
        self._fields: dict[str, Any] = {}

    def set(self, path: Path, value: Any) -> None:
        """Write ``value`` at ``path``; mapping values are merged into place."""

        segments = _segments(path)
        parent = self._descend(segments[:-1])
        self._write(parent, segments[-1], value, segments)

    def merge(self, subtree: Mapping[str, Any]) -> None:
        """Union ``subtree`` into the document key by key."""

        for key, value in subtree.items():
            self._write(self._fields, key, value, (key,))

    def __contains__(self, key: object) -> bool:
        return key in self._fields

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def to_dict(self) -> dict[str, Any]:
        """Return a deep copy of the accumulated fields."""

        return _copy_tree(self._fields)

    def serialize(self) -> str:
        """Render compact JSON terminated by exactly one newline."""

        return json.dumps(self._fields, ensure_ascii=False, separators=(",", ":"), allow_nan=False) + "\n"

    def _descend(self, segments: tuple[str, ...]) -> dict[str, Any]:
        node = self._fields
        for depth, segment in enumerate(segments):
            child = node.get(segment)
            if child is None:
                child = node[segment] = {}
            elif not isinstance(child, dict):
                raise FieldConflictError(f"{'.'.join(segments[: depth + 1])} already holds a scalar value")
            node = child
        return node

    def _write(self, node: dict[str, Any], key: str, value: Any, trail: tuple[str, ...]) -> None:
        current = node.get(key)
        if isinstance(value, Mapping):
            if current is None:
                current = node[key] = {}
            elif not isinstance(current, dict):
                raise FieldConflictError(f"{'.'.join(trail)} already holds a scalar value")
            for child_key, child_value in value.items():
                self._write(current, child_key, child_value, trail + (child_key,))
            return
        if key in node:
            raise FieldConflictError(f"{'.'.join(trail)} is already set")
        node[key] = value


def _copy_tree(node: dict[str, Any]) -> dict[str, Any]:
    return {key: _copy_tree(value) if isinstance(value, dict) else value for key, value in node.items()}


__all__ = ["EcsDocument", "FieldConflictError"]
