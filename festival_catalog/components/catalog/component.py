"""
Catalog component - Orchestrates the catalog, filters, sort and tasting log.

One CatalogOrchestrator per session. It owns the drink snapshot, the
current criteria and sort key, the active festival's tasting log partition
and the derived visible list.

Invariants:
- The visible list is always filter-then-sort of the current snapshot
- Observers are notified once per change, after state and visible list agree
- A failed save keeps the in-memory change (local-first, no rollback/retry)
- Mutations on unknown ids or missing tries change nothing and notify nobody
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime, timedelta
from types import MappingProxyType
from typing import Any

from festival_catalog.components.filtering import FilterCriteria, filter_drinks
from festival_catalog.components.sorting import SORT_KEYS, sort_drinks
from festival_catalog.components.tasting_log import (
    InvalidRatingError,
    PreferencesStore,
    RatingsStore,
    TastingLogStore,
    TastingLogWriteError,
)
from festival_catalog.domain import tasting
from festival_catalog.domain.entities import (
    Drink,
    FavoriteItem,
    NotesUpdate,
    SortKey,
    TastingPartition,
)
from festival_catalog.rules.models import CatalogRules

from .models import CatalogListener, NoActiveFestivalError, user_friendly_error
from .ports import CatalogSourcePort, NotificationPort, TimePort

logger = logging.getLogger(__name__)


class CatalogOrchestrator:
    """
    Explicit state container for one browsing session.

    Not thread-safe: all calls must come from one orchestration context.
    """

    def __init__(
        self,
        *,
        source: CatalogSourcePort,
        tasting_store: TastingLogStore,
        ratings_store: RatingsStore | None = None,
        preferences: PreferencesStore | None = None,
        notifier: NotificationPort | None = None,
        time_port: TimePort | None = None,
        rules: CatalogRules | None = None,
    ) -> None:
        self._source = source
        self._tasting_store = tasting_store
        self._ratings_store = ratings_store
        self._preferences = preferences
        self._notifier = notifier
        self._time_port = time_port
        self._rules = rules or CatalogRules()

        self._festival_id: str | None = None
        self._all_drinks: tuple[Drink, ...] = ()
        self._partition: TastingPartition = {}
        self._criteria = FilterCriteria()
        self._sort_key: SortKey = self._rules.default_sort
        self._visible: tuple[Drink, ...] = ()

        self._listeners: list[CatalogListener] = []
        self._is_loading = False
        self._error: str | None = None
        self._last_refresh: datetime | None = None

        if preferences is not None and preferences.get_hide_unavailable():
            self._criteria = self._criteria.with_changes(hide_unavailable=True)

    # --- Read-only state ---

    @property
    def festival_id(self) -> str | None:
        return self._festival_id

    @property
    def drinks(self) -> tuple[Drink, ...]:
        """The visible list: filtered, then sorted."""
        return self._visible

    @property
    def all_drinks(self) -> tuple[Drink, ...]:
        return self._all_drinks

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def sort_key(self) -> SortKey:
        return self._sort_key

    @property
    def tasting_log(self) -> Mapping[str, FavoriteItem]:
        return MappingProxyType(self._partition)

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def last_refresh(self) -> datetime | None:
        return self._last_refresh

    # --- Observers ---

    def subscribe(self, listener: CatalogListener) -> Callable[[], None]:
        """Register a change listener; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Catalog listener %r failed", listener)

    # --- Internals ---

    def _now(self) -> datetime:
        if self._time_port is not None:
            return self._time_port.now_utc()
        return datetime.now(UTC)

    def _require_festival(self) -> str:
        if self._festival_id is None:
            raise NoActiveFestivalError()
        return self._festival_id

    def _recompute(self) -> None:
        # Filter first so the sort only ever sees surviving drinks
        filtered = filter_drinks(
            self._all_drinks,
            self._criteria,
            tasting.favorite_ids(self._partition),
        )
        self._visible = tuple(sort_drinks(filtered, self._sort_key))

    def _with_ratings(self, drinks: Sequence[Drink], festival_id: str) -> tuple[Drink, ...]:
        if self._ratings_store is None:
            return tuple(drinks)
        rated: list[Drink] = []
        for drink in drinks:
            rating = self._ratings_store.get_rating(festival_id, drink.id)
            if rating is not None and rating != drink.rating:
                drink = drink.model_copy(update={"rating": rating})
            rated.append(drink)
        return tuple(rated)

    def _fetch(self, festival_id: str) -> None:
        """Fetch the catalog; on failure the list empties and error is set."""
        try:
            fetched = self._source.fetch_drinks(festival_id)
        except Exception as e:
            logger.exception("Failed to load drinks for festival %s", festival_id)
            self._all_drinks = ()
            self._error = user_friendly_error(e)
        else:
            self._all_drinks = self._with_ratings(fetched, festival_id)
            self._error = None
            self._last_refresh = self._now()
            logger.info("Loaded %d drinks for festival %s", len(self._all_drinks), festival_id)
        finally:
            self._is_loading = False
        self._recompute()

    def _commit_partition(self, partition: TastingPartition) -> None:
        """Adopt a new partition, persist it, refresh the list, then notify."""
        festival_id = self._require_festival()
        self._partition = partition
        try:
            self._tasting_store.save(festival_id, partition)
        except TastingLogWriteError as e:
            logger.error("Tasting log not saved for festival %s: %s", festival_id, e.cause)
            if self._notifier is not None:
                self._notifier.storage_write_failed(festival_id, e)
        if self._criteria.favorites_only:
            self._recompute()
        self._notify()

    # --- Festival lifecycle ---

    def activate_festival(
        self,
        festival_id: str,
        *,
        persist: bool = True,
        load: bool = True,
    ) -> None:
        """
        Switch to a festival.

        Resets category, styles and search, loads the festival's tasting log
        partition and (by default) fetches its catalog. Other partitions are
        never touched. Re-activating the current festival is a no-op.
        """
        if festival_id == self._festival_id:
            return

        self._festival_id = festival_id
        self._criteria = self._criteria.with_changes(
            category=None, styles=frozenset(), search_query=""
        )
        self._all_drinks = ()
        self._error = None
        self._last_refresh = None
        self._partition = self._tasting_store.load(festival_id)

        if persist and self._preferences is not None:
            try:
                self._preferences.set_selected_festival_id(festival_id)
            except Exception:
                logger.exception("Failed to persist selected festival %s", festival_id)

        if load:
            self._is_loading = True
            self._fetch(festival_id)
        else:
            self._recompute()
        self._notify()

    def restore_selected_festival(self, *, load: bool = True) -> str | None:
        """Re-activate the festival saved in preferences, if any."""
        if self._preferences is None:
            return None
        saved = self._preferences.get_selected_festival_id()
        if saved is not None:
            self.activate_festival(saved, persist=False, load=load)
        return saved

    def load_drinks(self) -> None:
        """Fetch the catalog for the active festival."""
        festival_id = self._require_festival()
        self._is_loading = True
        self._error = None
        self._notify()
        self._fetch(festival_id)
        self._notify()

    def set_drinks(self, drinks: Sequence[Drink]) -> None:
        """Replace the catalog snapshot wholesale (pushed by an external source)."""
        festival_id = self._require_festival()
        self._all_drinks = self._with_ratings(drinks, festival_id)
        self._error = None
        self._last_refresh = self._now()
        self._recompute()
        self._notify()

    @property
    def is_drinks_data_stale(self) -> bool:
        if self._last_refresh is None:
            return True
        threshold = timedelta(seconds=self._rules.drinks_staleness_seconds)
        return self._now() - self._last_refresh > threshold

    def refresh_if_stale(self) -> bool:
        """Reload drinks when the snapshot is older than the staleness threshold."""
        if self._is_loading or self._festival_id is None:
            return False
        if not self.is_drinks_data_stale:
            return False
        self.load_drinks()
        return True

    # --- Criteria and sort ---

    def set_criteria(self, **partial: Any) -> None:
        """Replace the given FilterCriteria fields and recompute."""
        self._criteria = self._criteria.with_changes(**partial)
        self._recompute()
        self._notify()

    def set_category(self, category: str | None) -> None:
        # Styles are category dependent
        if self._rules.clear_styles_on_category_change:
            self.set_criteria(category=category, styles=frozenset())
        else:
            self.set_criteria(category=category)

    def toggle_style(self, style: str) -> None:
        styles = set(self._criteria.styles)
        if style in styles:
            styles.remove(style)
        else:
            styles.add(style)
        self.set_criteria(styles=frozenset(styles))

    def clear_styles(self) -> None:
        self.set_criteria(styles=frozenset())

    def set_search_query(self, query: str) -> None:
        self.set_criteria(search_query=query)

    def set_favorites_only(self, value: bool) -> None:
        self.set_criteria(favorites_only=value)

    def set_hide_unavailable(self, value: bool) -> None:
        """Toggle hiding sold-out drinks and persist the preference."""
        self.set_criteria(hide_unavailable=value)
        if self._preferences is not None:
            try:
                self._preferences.set_hide_unavailable(value)
            except Exception:
                logger.exception("Failed to persist hide_unavailable preference")

    def reset_filters(self) -> None:
        self._criteria = FilterCriteria(hide_unavailable=self._criteria.hide_unavailable)
        self._recompute()
        self._notify()

    def set_sort_key(self, key: SortKey) -> None:
        if key not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {key!r}")
        self._sort_key = key
        self._recompute()
        self._notify()

    # --- Tasting log mutations ---

    def toggle_favorite(self, drink_id: str) -> bool:
        """
        Add to or remove from the log.

        Returns:
            True if the drink is in the log afterwards
        """
        self._require_festival()
        partition, changed = tasting.toggle_favorite(self._partition, drink_id, self._now())
        if changed:
            self._commit_partition(partition)
        return drink_id in self._partition

    def mark_tasted(self, drink_id: str) -> FavoriteItem:
        """Record a new try now; returns the updated entry."""
        self._require_festival()
        partition, changed = tasting.mark_tasted(self._partition, drink_id, self._now())
        if changed:
            self._commit_partition(partition)
        return self._partition[drink_id]

    def delete_try(self, drink_id: str, timestamp: datetime) -> bool:
        """Remove one try; returns False (and does nothing) if it did not exist."""
        self._require_festival()
        partition, changed = tasting.delete_try(
            self._partition, drink_id, timestamp, self._now()
        )
        if changed:
            self._commit_partition(partition)
        return changed

    def update_notes(self, drink_id: str, notes: NotesUpdate) -> bool:
        self._require_festival()
        partition, changed = tasting.update_notes(self._partition, drink_id, notes, self._now())
        if changed:
            self._commit_partition(partition)
        return changed

    def set_rating(self, drink_id: str, rating: int | None) -> None:
        """
        Set a 1-5 rating, or clear it with None.

        Raises:
            InvalidRatingError: If rating is outside 1-5
        """
        festival_id = self._require_festival()
        if rating is not None and not 1 <= rating <= 5:
            raise InvalidRatingError(rating)
        if self._ratings_store is not None:
            try:
                if rating is None:
                    self._ratings_store.remove_rating(festival_id, drink_id)
                else:
                    self._ratings_store.set_rating(festival_id, drink_id, rating)
            except Exception as e:
                # The in-memory rating still applies
                logger.error("Rating for %s not saved in festival %s: %s", drink_id, festival_id, e)
                if self._notifier is not None:
                    self._notifier.storage_write_failed(festival_id, e)

        self._all_drinks = tuple(
            d.model_copy(update={"rating": rating}) if d.id == drink_id else d
            for d in self._all_drinks
        )
        self._recompute()
        self._notify()

    # --- Derived views ---

    def favorite_item(self, drink_id: str) -> FavoriteItem | None:
        return self._partition.get(drink_id)

    def is_favorite(self, drink_id: str) -> bool:
        return drink_id in self._partition

    def try_count(self, drink_id: str) -> int:
        item = self._partition.get(drink_id)
        return item.try_count if item is not None else 0

    def get_drink(self, drink_id: str) -> Drink | None:
        return next((d for d in self._all_drinks if d.id == drink_id), None)

    @property
    def favorite_drinks(self) -> list[Drink]:
        return [d for d in self._all_drinks if d.id in self._partition]

    @property
    def available_categories(self) -> list[str]:
        return sorted({d.category for d in self._all_drinks})

    def _category_scope(self) -> list[Drink]:
        if self._criteria.category is None:
            return list(self._all_drinks)
        return [d for d in self._all_drinks if d.category == self._criteria.category]

    @property
    def available_styles(self) -> list[str]:
        """Styles present in the catalog, limited to the selected category."""
        return sorted({d.style for d in self._category_scope() if d.style})

    @property
    def category_counts(self) -> dict[str, int]:
        return dict(Counter(d.category for d in self._all_drinks))

    @property
    def style_counts(self) -> dict[str, int]:
        return dict(Counter(d.style for d in self._category_scope() if d.style))
