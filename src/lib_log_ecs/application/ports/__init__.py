"""Protocol definitions the formatter core depends on."""

from __future__ import annotations

from .contributor import ContributorPort
from .formatter import FormatterPort

__all__ = ["ContributorPort", "FormatterPort"]
