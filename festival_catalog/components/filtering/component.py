"""
Filtering component - Catalog filter engine.

Pure, stateless and order-preserving. Each predicate is skipped when its
criterion is inactive, so the same criteria applied twice return the same
sequence.

Invariants:
- Output is a subsequence of the input (order preserved, nothing added)
- filter(filter(D, C), C) == filter(D, C)
- Adding one active criterion never grows the result
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from festival_catalog.domain.entities import Drink

from .models import FilterCriteria

# --- Single-criterion filters ---


def filter_by_category(drinks: Iterable[Drink], category: str | None) -> list[Drink]:
    if category is None:
        return list(drinks)
    return [d for d in drinks if d.category == category]


def filter_by_styles(drinks: Iterable[Drink], styles: frozenset[str] | set[str]) -> list[Drink]:
    """Multi-select with OR logic; drinks without a style never match."""
    if not styles:
        return list(drinks)
    return [d for d in drinks if d.style is not None and d.style in styles]


def filter_by_favorites(
    drinks: Iterable[Drink],
    favorites_only: bool,
    favorite_ids: frozenset[str] | set[str],
) -> list[Drink]:
    if not favorites_only:
        return list(drinks)
    return [d for d in drinks if d.id in favorite_ids]


def filter_by_availability(drinks: Iterable[Drink], hide_unavailable: bool) -> list[Drink]:
    if not hide_unavailable:
        return list(drinks)
    return [d for d in drinks if d.availability_status != "out"]


def matches_search(drink: Drink, query: str) -> bool:
    """Case-insensitive substring match over name, brewery, style and notes."""
    needle = query.casefold()
    haystacks = (drink.name, drink.brewery_name, drink.style, drink.notes)
    return any(h is not None and needle in h.casefold() for h in haystacks)


def filter_by_search(drinks: Iterable[Drink], query: str) -> list[Drink]:
    if not query:
        return list(drinks)
    return [d for d in drinks if matches_search(d, query)]


# --- Component Entry Point ---


def filter_drinks(
    drinks: Sequence[Drink],
    criteria: FilterCriteria,
    favorite_ids: frozenset[str] | set[str] = frozenset(),
) -> list[Drink]:
    """
    Apply every active criterion in a single pass.

    Args:
        drinks: Catalog snapshot
        criteria: Current filter criteria
        favorite_ids: Ids present in the active tasting log (any status)

    Returns:
        New list with the surviving drinks in their original order
    """
    if not criteria.is_active():
        return list(drinks)

    result: list[Drink] = []
    for drink in drinks:
        if criteria.category is not None and drink.category != criteria.category:
            continue
        if criteria.styles and (drink.style is None or drink.style not in criteria.styles):
            continue
        if criteria.favorites_only and drink.id not in favorite_ids:
            continue
        if criteria.hide_unavailable and drink.availability_status == "out":
            continue
        if criteria.search_query and not matches_search(drink, criteria.search_query):
            continue
        result.append(drink)
    return result
