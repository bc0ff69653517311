from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lib_log_ecs.adapters.ecs_formatter import EcsFormatter
from lib_log_ecs.application.ports import ContributorPort, FormatterPort
from lib_log_ecs.domain.events import LogEvent


class _CustomContributor:
    def contribute(self) -> Mapping[str, Any]:
        return {"user": {"name": "custom"}}


class _NotAContributor:
    def to_dict(self) -> dict[str, Any]:
        return {}


class _EchoFormatter:
    def format(self, event: LogEvent) -> str:
        return event.message + "\n"


def test_structural_contributor_satisfies_port() -> None:
    assert isinstance(_CustomContributor(), ContributorPort)
    assert not isinstance(_NotAContributor(), ContributorPort)


def test_formatters_satisfy_port() -> None:
    assert isinstance(EcsFormatter(), FormatterPort)
    assert isinstance(_EchoFormatter(), FormatterPort)


def test_custom_contributor_is_dispatched_by_key(event_factory) -> None:
    document = EcsFormatter().build_document(event_factory({"context": {"user": _CustomContributor()}}))
    assert document["user"] == {"name": "custom"}
    assert "labels" not in document


def test_non_contributor_under_reserved_key_is_labelled(event_factory) -> None:
    document = EcsFormatter().build_document(event_factory({"context": {"service": _NotAContributor()}}))
    assert "service" not in document
    assert "service" in document["labels"]


class _StrayContributor:
    def contribute(self) -> Mapping[str, Any]:
        return {"host": {"name": "box"}, "labels": {"injected": 1}}


class _ListContributor:
    def contribute(self) -> Any:
        return [("trace", {"id": "t"})]


def test_contributor_writing_unreserved_fields_is_labelled(event_factory) -> None:
    document = EcsFormatter().build_document(event_factory({"context": {"tracing": _StrayContributor()}}))
    decoded = document.to_dict()
    assert "host" not in decoded
    assert "trace" not in decoded
    assert list(decoded["labels"]) == ["tracing"]
    assert "injected" not in decoded["labels"]


def test_stray_contributor_does_not_block_later_contributors(event_factory) -> None:
    context = {"tracing": _StrayContributor(), "user": _CustomContributor()}
    document = EcsFormatter().build_document(event_factory({"context": context}))
    assert document["user"] == {"name": "custom"}
    assert "tracing" in document["labels"]


def test_contributor_returning_non_mapping_is_labelled(event_factory) -> None:
    document = EcsFormatter().build_document(event_factory({"context": {"tracing": _ListContributor()}}))
    assert "trace" not in document
    assert "tracing" in document["labels"]
