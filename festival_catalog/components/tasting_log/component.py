"""
Tasting log component - Per-festival persistence of favorites and tries.

The whole partition for a festival is stored as one JSON object under a
single key, so a save is one backend write.

Invariants:
- load() never raises on bad data; it degrades to "no data" and reports
- save() writes a complete snapshot; writes for one festival never overlap
- load() right after save(m) returns a mapping equal to m (ms precision)
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Mapping
from typing import Any

from festival_catalog.domain.entities import FavoriteItem, TastingPartition

from ._codec import decode_favorite_item, encode_favorite_item
from .models import DecodeError, InvalidRatingError, TastingLogWriteError
from .ports import DiagnosticsPort, KeyValuePort

logger = logging.getLogger(__name__)

DEFAULT_FAVORITES_KEY = "{festival_id}_favorites"
DEFAULT_RATINGS_KEY = "ratings_{festival_id}_{drink_id}"
DEFAULT_SELECTED_FESTIVAL_KEY = "selected_festival_id"
DEFAULT_HIDE_UNAVAILABLE_KEY = "hide_unavailable"


class TastingLogStore:
    """Load and save festival tasting log partitions through a KeyValuePort."""

    def __init__(
        self,
        backend: KeyValuePort,
        *,
        diagnostics: DiagnosticsPort | None = None,
        key_template: str = DEFAULT_FAVORITES_KEY,
    ) -> None:
        self._backend = backend
        self._diagnostics = diagnostics
        self._key_template = key_template
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def key_for(self, festival_id: str) -> str:
        return self._key_template.format(festival_id=festival_id)

    def _lock_for(self, festival_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(festival_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[festival_id] = lock
            return lock

    def _report(self, event: str, festival_id: str, **detail: Any) -> None:
        logger.warning("Tasting log %s for festival %s: %s", event, festival_id, detail)
        if self._diagnostics is not None:
            self._diagnostics.report(event, {"festival_id": festival_id, **detail})

    def load(self, festival_id: str) -> TastingPartition:
        """
        Load the partition for a festival.

        Returns an empty mapping when nothing is stored or the stored blob
        is unreadable. Individual entries that fail to decode are dropped;
        entries whose status contradicts their tries are kept and repaired.
        """
        # Wait for any in-flight save so we never read a half-applied snapshot
        with self._lock_for(festival_id):
            blob = self._backend.get_string(self.key_for(festival_id))

        if blob is None or blob == "":
            return {}

        try:
            data = json.loads(blob)
        except (ValueError, RecursionError) as e:
            # JSONDecodeError is a ValueError; pathological nesting overflows the decoder
            self._report("corrupt_blob", festival_id, error=str(e))
            return {}

        if not isinstance(data, dict):
            self._report("corrupt_blob", festival_id, error="top-level value is not an object")
            return {}

        partition: TastingPartition = {}
        for drink_id, raw in data.items():
            decoded = decode_favorite_item(drink_id, raw)
            if isinstance(decoded, DecodeError):
                self._report(
                    "dropped_entry",
                    festival_id,
                    drink_id=drink_id,
                    code=decoded.code,
                    error=decoded.message,
                )
                continue
            stored_status = raw.get("status")
            if stored_status is not None and stored_status != decoded.status:
                self._report(
                    "repaired_status",
                    festival_id,
                    drink_id=drink_id,
                    stored=stored_status,
                    status=decoded.status,
                )
            partition[drink_id] = decoded
        return partition

    def save(self, festival_id: str, partition: Mapping[str, FavoriteItem]) -> None:
        """
        Persist the full partition snapshot.

        Raises:
            TastingLogWriteError: If the backend write fails
        """
        payload = json.dumps(
            {drink_id: encode_favorite_item(item) for drink_id, item in partition.items()},
            separators=(",", ":"),
        )
        with self._lock_for(festival_id):
            try:
                self._backend.set_string(self.key_for(festival_id), payload)
            except Exception as e:
                raise TastingLogWriteError(festival_id, e) from e
        logger.debug("Saved %d tasting log entries for festival %s", len(partition), festival_id)

    def clear(self, festival_id: str) -> None:
        with self._lock_for(festival_id):
            self._backend.remove(self.key_for(festival_id))


class RatingsStore:
    """Personal 1-5 star ratings, one key per festival and drink."""

    def __init__(
        self,
        backend: KeyValuePort,
        *,
        key_template: str = DEFAULT_RATINGS_KEY,
    ) -> None:
        self._backend = backend
        self._key_template = key_template

    def key_for(self, festival_id: str, drink_id: str) -> str:
        return self._key_template.format(festival_id=festival_id, drink_id=drink_id)

    def get_rating(self, festival_id: str, drink_id: str) -> int | None:
        value = self._backend.get_string(self.key_for(festival_id, drink_id))
        if value is None:
            return None
        try:
            rating = int(value)
        except ValueError:
            logger.warning("Ignoring unreadable rating %r for %s/%s", value, festival_id, drink_id)
            return None
        if not 1 <= rating <= 5:
            logger.warning("Ignoring out-of-range rating %d for %s/%s", rating, festival_id, drink_id)
            return None
        return rating

    def set_rating(self, festival_id: str, drink_id: str, rating: int) -> None:
        """
        Raises:
            InvalidRatingError: If rating is not between 1 and 5
        """
        if not 1 <= rating <= 5:
            raise InvalidRatingError(rating)
        self._backend.set_string(self.key_for(festival_id, drink_id), str(rating))

    def remove_rating(self, festival_id: str, drink_id: str) -> None:
        self._backend.remove(self.key_for(festival_id, drink_id))


class PreferencesStore:
    """Selected festival and the persisted hide-unavailable flag."""

    def __init__(
        self,
        backend: KeyValuePort,
        *,
        selected_festival_key: str = DEFAULT_SELECTED_FESTIVAL_KEY,
        hide_unavailable_key: str = DEFAULT_HIDE_UNAVAILABLE_KEY,
    ) -> None:
        self._backend = backend
        self._selected_festival_key = selected_festival_key
        self._hide_unavailable_key = hide_unavailable_key

    def get_selected_festival_id(self) -> str | None:
        value = self._backend.get_string(self._selected_festival_key)
        return value or None

    def set_selected_festival_id(self, festival_id: str) -> None:
        self._backend.set_string(self._selected_festival_key, festival_id)

    def clear_selected_festival(self) -> None:
        self._backend.remove(self._selected_festival_key)

    def get_hide_unavailable(self) -> bool:
        return self._backend.get_string(self._hide_unavailable_key) == "true"

    def set_hide_unavailable(self, value: bool) -> None:
        self._backend.set_string(self._hide_unavailable_key, "true" if value else "false")
