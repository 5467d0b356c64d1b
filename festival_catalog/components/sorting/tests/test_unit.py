"""
Unit tests for Sorting component.
"""

from __future__ import annotations

import pytest

from festival_catalog.domain.entities import SORT_KEYS, Drink

from ..component import sort_drinks


def names(drinks: list[Drink]) -> list[str]:
    return [d.name for d in drinks]


@pytest.fixture
def drinks() -> list[Drink]:
    return [
        Drink(id="a", name="Zeta", abv=5.0, brewery_name="beta brewing", style="stout"),
        Drink(id="b", name="Alpha", abv=6.0, brewery_name="Alpha Ales", style="IPA"),
        Drink(id="c", name="mild thing", abv=3.5, brewery_name="Alpha Ales", style=None),
        Drink(id="d", name="Bitter", abv=5.0, brewery_name="Beta Brewing", style="Bitter"),
    ]


class TestScenarios:
    def test_name_asc(self):
        drinks = [Drink(id="a", name="Zeta", abv=5.0), Drink(id="b", name="Alpha", abv=6.0)]
        assert names(sort_drinks(drinks, "name_asc")) == ["Alpha", "Zeta"]

    def test_abv_high(self):
        drinks = [Drink(id="a", name="Zeta", abv=5.0), Drink(id="b", name="Alpha", abv=6.0)]
        result = sort_drinks(drinks, "abv_high")
        assert [(d.name, d.abv) for d in result] == [("Alpha", 6.0), ("Zeta", 5.0)]


class TestSortKeys:
    def test_name_asc_is_case_insensitive(self, drinks):
        assert names(sort_drinks(drinks, "name_asc")) == ["Alpha", "Bitter", "mild thing", "Zeta"]

    def test_name_desc(self, drinks):
        assert names(sort_drinks(drinks, "name_desc")) == ["Zeta", "mild thing", "Bitter", "Alpha"]

    def test_abv_high_ties_broken_by_name(self, drinks):
        assert names(sort_drinks(drinks, "abv_high")) == ["Alpha", "Bitter", "Zeta", "mild thing"]

    def test_abv_low_ties_broken_by_name(self, drinks):
        assert names(sort_drinks(drinks, "abv_low")) == ["mild thing", "Bitter", "Zeta", "Alpha"]

    def test_brewery_case_insensitive_then_name(self, drinks):
        assert names(sort_drinks(drinks, "brewery")) == ["Alpha", "mild thing", "Bitter", "Zeta"]

    def test_style_missing_last(self, drinks):
        assert names(sort_drinks(drinks, "style")) == ["Bitter", "Alpha", "Zeta", "mild thing"]

    def test_unknown_key_raises(self, drinks):
        with pytest.raises(ValueError, match="Unknown sort key"):
            sort_drinks(drinks, "price")  # type: ignore[arg-type]


class TestSortProperties:
    def test_does_not_mutate_input(self, drinks):
        before = list(drinks)
        sort_drinks(drinks, "abv_high")
        assert drinks == before

    @pytest.mark.parametrize("key", SORT_KEYS)
    def test_closure(self, drinks, key):
        result = sort_drinks(drinks, key)
        assert sorted(d.id for d in result) == sorted(d.id for d in drinks)
        assert len(result) == len(drinks)

    @pytest.mark.parametrize("key", SORT_KEYS)
    def test_resorting_is_stable(self, drinks, key):
        once = sort_drinks(drinks, key)
        assert sort_drinks(once, key) == once

    @pytest.mark.parametrize("key", ["name_asc", "name_desc"])
    def test_equal_names_keep_prior_order(self, key):
        drinks = [
            Drink(id="1", name="Same", abv=4.0),
            Drink(id="2", name="same", abv=5.0),
            Drink(id="3", name="SAME", abv=6.0),
        ]
        assert [d.id for d in sort_drinks(drinks, key)] == ["1", "2", "3"]

    def test_empty_input(self):
        assert sort_drinks([], "style") == []
