"""Port describing values that enrich a document with their own ECS fields."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ContributorPort(Protocol):
    """Produce a nested ECS subtree such as ``{"trace": {"id": "..."}}``."""

    def contribute(self) -> Mapping[str, Any]:
        """Return the fields this value owns."""


__all__ = ["ContributorPort"]
