"""
Sorting component - Stable multi-key catalog sorting.
"""

from festival_catalog.domain.entities import SORT_KEYS, SortKey

from .component import SORT_STRATEGIES, sort_drinks

__all__ = [
    "sort_drinks",
    "SORT_STRATEGIES",
    "SORT_KEYS",
    "SortKey",
]
