"""
Filtering component - Multi-criteria catalog filtering.
"""

from .component import (
    filter_by_availability,
    filter_by_category,
    filter_by_favorites,
    filter_by_search,
    filter_by_styles,
    filter_drinks,
    matches_search,
)
from .models import FilterCriteria

__all__ = [
    # Component functions
    "filter_drinks",
    # Single-criterion filters
    "filter_by_category",
    "filter_by_styles",
    "filter_by_favorites",
    "filter_by_availability",
    "filter_by_search",
    "matches_search",
    # Models
    "FilterCriteria",
]
