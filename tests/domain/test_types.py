from __future__ import annotations

import errno
import inspect
import os

import pytest

from lib_log_ecs.application.ports.contributor import ContributorPort
from lib_log_ecs.domain.types import Error, Service, Tracing, User


class InvalidArgumentError(ValueError):
    def __init__(self, message: str, code: int) -> None:
        super().__init__(message)
        self.code = code


def _raise_invalid_argument() -> InvalidArgumentError:
    try:
        raise InvalidArgumentError("bad input", code=42)
    except InvalidArgumentError as exc:
        return exc


RAISE_LINE = _raise_invalid_argument.__code__.co_firstlineno + 2


def test_tracing_contributes_trace_and_transaction() -> None:
    assert Tracing("trace-1", "tx-1").contribute() == {"trace": {"id": "trace-1"}, "transaction": {"id": "tx-1"}}


def test_service_omits_absent_fields() -> None:
    assert Service(id=123, name="funky-service-01").contribute() == {"service": {"id": 123, "name": "funky-service-01"}}
    assert Service(name="only-name").contribute() == {"service": {"name": "only-name"}}
    assert Service().contribute() == {}


def test_service_nests_node_name() -> None:
    subtree = Service(version="1.2.3", type="api", node_name="node-a").contribute()
    assert subtree == {"service": {"version": "1.2.3", "type": "api", "node": {"name": "node-a"}}}


def test_user_contributes_id_and_hash() -> None:
    assert User(id=7, hash="5f4dcc3b").contribute() == {"user": {"id": 7, "hash": "5f4dcc3b"}}
    assert User(email="a@example.org").contribute() == {"user": {"email": "a@example.org"}}
    assert User().contribute() == {}


@pytest.mark.parametrize(
    "value",
    [Tracing("t", "x"), Service(), User(), Error(RuntimeError("boom"))],
)
def test_all_types_satisfy_contributor_port(value: object) -> None:
    assert isinstance(value, ContributorPort)


def test_error_describes_raised_exception() -> None:
    error = Error(_raise_invalid_argument())
    subtree = error.contribute()

    assert subtree["error"]["type"] == f"{__name__}.InvalidArgumentError"
    assert subtree["error"]["message"] == "bad input"
    assert subtree["error"]["code"] == 42
    assert os.path.basename(subtree["log"]["origin"]["file"]["name"]) == "test_types.py"
    assert subtree["log"]["origin"]["file"]["line"] == RAISE_LINE


def test_error_stack_trace_runs_from_caller_to_raise_site() -> None:
    error = Error(_raise_invalid_argument())
    functions = [frame["function"] for frame in error.stack_trace]

    assert functions[-1] == "_raise_invalid_argument"
    assert "test_error_stack_trace_runs_from_caller_to_raise_site" in functions
    assert error.stack_trace[-1]["line"] == RAISE_LINE
    assert all(set(frame) == {"file", "line", "function"} for frame in error.stack_trace)


def test_error_uses_plain_name_for_builtin_types() -> None:
    try:
        {}["missing"]
    except KeyError as exc:
        error = Error(exc)
    assert error.type == "KeyError"
    assert error.message == "'missing'"
    assert error.code == 0


def test_error_origin_for_unraised_exception_is_construction_site() -> None:
    exc = ValueError("never raised")
    error = Error(exc)
    expected_line = inspect.currentframe().f_lineno - 1

    assert error.origin_line == expected_line
    assert os.path.basename(error.origin_file) == "test_types.py"
    assert error.stack_trace
    assert error.stack_trace[-1]["function"] == "test_error_origin_for_unraised_exception_is_construction_site"


def test_error_code_falls_back_to_errno() -> None:
    error = Error(OSError(errno.ENOENT, "No such file"))
    assert error.code == errno.ENOENT


@pytest.mark.parametrize("code", ["E100", True, None, 1.5])
def test_error_code_ignores_non_integer_codes(code: object) -> None:
    exc = RuntimeError("boom")
    exc.code = code  # type: ignore[attr-defined]
    assert Error(exc).code == 0


def test_error_contribution_copies_stack_trace() -> None:
    error = Error(RuntimeError("boom"))
    subtree = error.contribute()
    subtree["error"]["stack_trace"].clear()
    assert error.stack_trace


def test_error_rejects_non_exceptions() -> None:
    with pytest.raises(TypeError, match="exception instance"):
        Error("not an exception")  # type: ignore[arg-type]


def test_error_without_frames_has_empty_trace_and_no_origin(monkeypatch: pytest.MonkeyPatch) -> None:
    from lib_log_ecs.domain import types as types_module

    monkeypatch.setattr(types_module.inspect, "currentframe", lambda: None)
    error = Error(ValueError("x"))

    assert error.stack_trace == []
    assert error.origin_file is None
    assert error.origin_line is None
    assert error.contribute() == {"error": {"type": "ValueError", "message": "x", "code": 0, "stack_trace": []}}
