"""
Sorting component - Catalog sort engine.

Strategy-selected key functions applied with Python's stable sort.
Each strategy breaks ties on drink name, so the order is total and
repeatable; equal keys keep their prior relative order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from festival_catalog.domain.entities import Drink, SortKey


def _fold(value: str) -> str:
    return value.casefold()


def _by_name(drink: Drink) -> Any:
    return _fold(drink.name)


def _by_abv(drink: Drink) -> Any:
    return (drink.abv, _fold(drink.name))


def _by_abv_desc(drink: Drink) -> Any:
    return (-drink.abv, _fold(drink.name))


def _by_brewery(drink: Drink) -> Any:
    return (_fold(drink.brewery_name), _fold(drink.name))


def _by_style(drink: Drink) -> Any:
    # Missing style sorts last
    if drink.style is None:
        return (1, "", _fold(drink.name))
    return (0, _fold(drink.style), _fold(drink.name))


# key -> (key function, reverse)
SORT_STRATEGIES: dict[str, tuple[Callable[[Drink], Any], bool]] = {
    "name_asc": (_by_name, False),
    "name_desc": (_by_name, True),
    "abv_high": (_by_abv_desc, False),
    "abv_low": (_by_abv, False),
    "brewery": (_by_brewery, False),
    "style": (_by_style, False),
}


def sort_drinks(drinks: Iterable[Drink], key: SortKey) -> list[Drink]:
    """
    Return a NEW list of drinks ordered by the given sort key.

    The input is never mutated. reverse=True keeps Python's sort stable,
    so ties under name_desc also preserve prior order.

    Raises:
        ValueError: If key is not a known sort key
    """
    try:
        key_fn, reverse = SORT_STRATEGIES[key]
    except KeyError:
        raise ValueError(f"Unknown sort key: {key!r}") from None
    return sorted(drinks, key=key_fn, reverse=reverse)
