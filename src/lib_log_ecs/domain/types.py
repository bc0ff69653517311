"""Typed context values that contribute their own ECS subtrees.

Purpose
-------
Let callers attach strongly typed objects to a record's context (under the
keys ``tracing``, ``service``, ``user`` and ``error``) instead of loose
dictionaries. Each object knows which ECS fields it owns.

Contents
--------
* :class:`Tracing` – ``trace.id`` / ``transaction.id``.
* :class:`Service` – ``service.*``.
* :class:`User` – ``user.*``.
* :class:`Error` – ``error.*`` plus ``log.origin.file.*``.

System Role
-----------
All classes satisfy :class:`lib_log_ecs.application.ports.ContributorPort`
structurally; the formatter dispatches on the context key, never on the
concrete class.
"""

from __future__ import annotations

import inspect
import traceback
from dataclasses import dataclass
from types import FrameType, TracebackType
from typing import Any


def _without_none(fields: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not None}


@dataclass(slots=True, frozen=True)
class Tracing:
    """Distributed tracing identifiers of the current transaction."""

    trace_id: str
    transaction_id: str

    def contribute(self) -> dict[str, Any]:
        """Return the ``trace`` and ``transaction`` subtrees.

        Examples
        --------
        >>> Tracing("abc", "def").contribute()
        {'trace': {'id': 'abc'}, 'transaction': {'id': 'def'}}
        """

        return {"trace": {"id": self.trace_id}, "transaction": {"id": self.transaction_id}}


@dataclass(slots=True, frozen=True)
class Service:
    """Describes the service emitting the record; absent fields are omitted."""

    id: int | str | None = None
    name: str | None = None
    version: str | None = None
    type: str | None = None
    state: str | None = None
    ephemeral_id: str | None = None
    node_name: str | None = None

    def contribute(self) -> dict[str, Any]:
        """Return the ``service`` subtree.

        Examples
        --------
        >>> Service(id=7, name="billing").contribute()
        {'service': {'id': 7, 'name': 'billing'}}
        >>> Service(node_name="node-1").contribute()
        {'service': {'node': {'name': 'node-1'}}}
        """

        fields = _without_none(
            {
                "id": self.id,
                "name": self.name,
                "version": self.version,
                "type": self.type,
                "state": self.state,
                "ephemeral_id": self.ephemeral_id,
            }
        )
        if self.node_name is not None:
            fields["node"] = {"name": self.node_name}
        return {"service": fields} if fields else {}


@dataclass(slots=True, frozen=True)
class User:
    """Identifies the user on whose behalf the record was emitted."""

    id: int | str | None = None
    hash: str | None = None
    name: str | None = None
    full_name: str | None = None
    email: str | None = None
    domain: str | None = None

    def contribute(self) -> dict[str, Any]:
        fields = _without_none(
            {
                "id": self.id,
                "hash": self.hash,
                "name": self.name,
                "full_name": self.full_name,
                "email": self.email,
                "domain": self.domain,
            }
        )
        return {"user": fields} if fields else {}


class Error:
    """Snapshot of an exception taken when the wrapper is constructed.

    The stack trace is listed oldest call first, like :mod:`traceback`. For a
    raised exception it runs from the outermost caller down to the ``raise``
    statement, and the origin is that ``raise`` site. An exception that was
    never raised has no traceback, so the call stack at ``Error(...)`` is used
    and the origin is the line that built the wrapper.

    Parameters
    ----------
    exception:
        The exception to describe.
    """

    __slots__ = ("exception", "type", "message", "code", "stack_trace", "origin_file", "origin_line")

    def __init__(self, exception: BaseException) -> None:
        if not isinstance(exception, BaseException):
            raise TypeError(f"Error expects an exception instance, got {type(exception).__name__}")
        self.exception = exception
        self.type = _qualified_type_name(exception)
        self.message = str(exception)
        self.code = _error_code(exception)

        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        try:
            frames = _collect_frames(exception.__traceback__, caller)
        finally:
            del frame, caller
        self.stack_trace: list[dict[str, Any]] = [
            {"file": summary.filename, "line": summary.lineno, "function": summary.name} for summary in frames
        ]
        if frames:
            self.origin_file: str | None = frames[-1].filename
            self.origin_line: int | None = frames[-1].lineno
        else:
            self.origin_file = None
            self.origin_line = None

    def contribute(self) -> dict[str, Any]:
        """Return the ``error`` subtree and the ``log.origin`` location."""

        subtree: dict[str, Any] = {
            "error": {
                "type": self.type,
                "message": self.message,
                "code": self.code,
                "stack_trace": list(self.stack_trace),
            }
        }
        if self.origin_file is not None:
            subtree["log"] = {"origin": {"file": {"name": self.origin_file, "line": self.origin_line}}}
        return subtree

    def __repr__(self) -> str:
        return f"Error(type={self.type!r}, message={self.message!r}, code={self.code!r})"


def _qualified_type_name(exception: BaseException) -> str:
    cls = type(exception)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def _error_code(exception: BaseException) -> int:
    for attribute in ("code", "errno"):
        value = getattr(exception, attribute, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return 0


def _collect_frames(tb: TracebackType | None, caller: FrameType | None) -> list[traceback.FrameSummary]:
    if tb is not None:
        outer = tb.tb_frame.f_back
        frames = list(traceback.extract_stack(outer)) if outer is not None else []
        return frames + list(traceback.extract_tb(tb))
    if caller is not None:
        return list(traceback.extract_stack(caller))
    return []


__all__ = ["Error", "Service", "Tracing", "User"]
