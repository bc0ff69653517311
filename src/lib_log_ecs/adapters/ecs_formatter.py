"""ECS formatter turning :class:`LogEvent` objects into JSON lines.

Purpose
-------
Render one record as a compact Elastic Common Schema document: fixed base
fields, subtrees contributed by typed context values, sanitised labels for
everything else, and optional static tags.

Contents
--------
* :data:`ECS_VERSION` - schema version written to ``ecs.version``.
* :data:`CONTRIBUTOR_KEYS` - context keys checked for typed contributors.
* :data:`CONTRIBUTED_ROOTS` - top-level fields contributors may write.
* :class:`EcsFormatter` - concrete :class:`FormatterPort` implementation.

System Role
-----------
Core of the package. The stdlib bridge, the façade and the CLI all delegate
to :meth:`EcsFormatter.format`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from lib_log_ecs.application.ports.contributor import ContributorPort
from lib_log_ecs.application.ports.formatter import FormatterPort
from lib_log_ecs.domain.document import EcsDocument
from lib_log_ecs.domain.events import LogEvent
from lib_log_ecs.domain.labels import normalise_label_value, sanitize_label_key

logger = logging.getLogger(__name__)

ECS_VERSION = "1.2.0"

CONTRIBUTOR_KEYS: tuple[str, ...] = ("tracing", "service", "user", "error")
#: Context keys whose values may contribute ECS subtrees, in merge order.

_LABELS_KEY = "labels"

CONTRIBUTED_ROOTS: frozenset[str] = frozenset({"log", "trace", "transaction", "service", "user", "error"})
#: Top-level fields a contributor may write; anything else demotes it to a label.


def _validate_tags(tags: Iterable[str] | None) -> tuple[str, ...]:
    """Freeze ``tags`` into a tuple, rejecting anything but strings.

    Examples
    --------
    >>> _validate_tags(["one", "two"])
    ('one', 'two')
    >>> _validate_tags(None)
    ()
    >>> _validate_tags("one")
    Traceback (most recent call last):
    ...
    ValueError: tags must be a sequence of strings, not a single str
    """
    if tags is None:
        return ()
    if isinstance(tags, (str, bytes, bytearray, Mapping)):
        raise ValueError(f"tags must be a sequence of strings, not a single {type(tags).__name__}")
    try:
        frozen = tuple(tags)
    except TypeError as exc:
        raise ValueError(f"tags must be a sequence of strings, got {type(tags).__name__}") from exc
    invalid = [tag for tag in frozen if not isinstance(tag, str)]
    if invalid:
        raise ValueError(f"tags must be strings, got {invalid!r}")
    return frozen


def format_timestamp(ts: datetime) -> str:
    """Render ``ts`` as UTC ISO-8601 with microseconds and a ``Z`` suffix.

    Examples
    --------
    >>> format_timestamp(datetime(1970, 1, 1, tzinfo=timezone.utc))
    '1970-01-01T00:00:00.000000Z'
    """
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    try:
        utc = ts.astimezone(timezone.utc)
    except OverflowError as exc:
        raise ValueError(f"timestamp {ts!r} cannot be represented in UTC") from exc
    return utc.replace(tzinfo=None).isoformat(timespec="microseconds") + "Z"


class EcsFormatter(FormatterPort):
    """Format log events as ECS JSON lines.

    Instances hold nothing but the frozen tag tuple, so one formatter can be
    shared between threads.

    Parameters
    ----------
    tags:
        Optional sequence of strings copied verbatim to the ``tags`` field.

    Raises
    ------
    ValueError
        When ``tags`` is not a sequence of strings.

    Examples
    --------
    >>> from lib_log_ecs.domain.levels import LogLevel
    >>> event = LogEvent(LogLevel.INFO, "INFO", "app", datetime(1970, 1, 1, tzinfo=timezone.utc), "ready")
    >>> EcsFormatter(tags=["edge"]).format(event)
    '{"@timestamp":"1970-01-01T00:00:00.000000Z","log.level":"INFO","message":"ready","ecs.version":"1.2.0","log":{"logger":"app"},"tags":["edge"]}\\n'
    """

    def __init__(self, tags: Iterable[str] | None = None) -> None:
        self._tags = _validate_tags(tags)

    @property
    def tags(self) -> tuple[str, ...]:
        """Tags written to every document."""

        return self._tags

    def format(self, event: LogEvent) -> str:
        """Return ``event`` as one compact ECS JSON document plus ``\\n``."""

        return self.build_document(event).serialize()

    def build_document(self, event: LogEvent) -> EcsDocument:
        """Assemble the :class:`EcsDocument` for ``event`` without serialising it."""

        document = EcsDocument()
        document.set("@timestamp", format_timestamp(event.timestamp))
        document.set("log.level", event.level_name)
        document.set("message", event.message)
        document.set("ecs.version", ECS_VERSION)
        document.set(("log", "logger"), event.channel)

        consumed = self._apply_contributors(document, event.context)

        labels = self._collect_labels(event.context, event.extra, consumed)
        if labels:
            document.set(_LABELS_KEY, labels)

        if self._tags:
            document.set("tags", list(self._tags))
        return document

    @staticmethod
    def _apply_contributors(document: EcsDocument, context: Mapping[str, Any]) -> frozenset[str]:
        """Merge subtrees of typed context values and return the consumed keys.

        A contribution that is not a mapping, or that reaches outside
        :data:`CONTRIBUTED_ROOTS`, is not merged; its context entry is left
        for :meth:`_collect_labels`.
        """

        consumed: set[str] = set()
        for key in CONTRIBUTOR_KEYS:
            value = context.get(key)
            if isinstance(value, type) or not isinstance(value, ContributorPort):
                continue
            contribution = value.contribute()
            if not isinstance(contribution, Mapping):
                logger.debug("Context key %r returned a %s instead of a mapping; keeping it as a label", key, type(contribution).__name__)
                continue
            stray = sorted(str(root) for root in contribution if root not in CONTRIBUTED_ROOTS)
            if stray:
                logger.debug("Context key %r contributes unreserved fields %s; keeping it as a label", key, stray)
                continue
            logger.debug("Merging %s contribution from context key %r", type(value).__name__, key)
            document.merge(contribution)
            consumed.add(key)
        return frozenset(consumed)

    @staticmethod
    def _collect_labels(
        context: Mapping[str, Any],
        extra: Mapping[str, Any],
        consumed: frozenset[str],
    ) -> dict[str, Any]:
        """Fold remaining context entries, then all of ``extra``, into labels.

        A context entry named ``labels`` holding a mapping is spread entry by
        entry. When two keys sanitise to the same label the later one wins.
        """

        labels: dict[str, Any] = {}

        def _put(raw_key: Any, value: Any) -> None:
            key = sanitize_label_key(str(raw_key))
            if key in labels:
                logger.debug("Label key %r from %r replaces an earlier value", key, raw_key)
            labels[key] = normalise_label_value(value)

        for key, value in context.items():
            if key in consumed:
                continue
            if key == _LABELS_KEY and isinstance(value, Mapping):
                for label_key, label_value in value.items():
                    _put(label_key, label_value)
                continue
            _put(key, value)
        for key, value in extra.items():
            _put(key, value)
        return labels


__all__ = ["CONTRIBUTED_ROOTS", "CONTRIBUTOR_KEYS", "ECS_VERSION", "EcsFormatter", "format_timestamp"]
