"""
Filtering component input models.

FilterCriteria is transient UI state and is never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class FilterCriteria:
    """
    Conjunctive filter criteria for the drink catalog.

    styles are OR-matched among themselves; every other criterion narrows
    the result further. Defaults are all no-ops.
    """

    category: str | None = None
    styles: frozenset[str] = field(default_factory=frozenset)
    favorites_only: bool = False
    hide_unavailable: bool = False
    search_query: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.styles, frozenset):
            object.__setattr__(self, "styles", frozenset(self.styles))

    def is_active(self) -> bool:
        """True if any criterion would restrict the catalog."""
        return (
            self.category is not None
            or bool(self.styles)
            or self.favorites_only
            or self.hide_unavailable
            or bool(self.search_query)
        )

    def with_changes(self, **partial: Any) -> FilterCriteria:
        """Return a copy with only the given fields replaced."""
        return replace(self, **partial)
