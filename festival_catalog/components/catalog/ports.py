"""
Catalog component port definitions.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from festival_catalog.domain.entities import Drink


class CatalogSourcePort(Protocol):
    """Provider of the festival drink list (network, cache, fixtures)."""

    def fetch_drinks(self, festival_id: str) -> Sequence[Drink]:
        """
        Fetch every drink offered at a festival.

        Raises:
            CatalogFetchError: On transport or upstream failure
        """
        ...


class NotificationPort(Protocol):
    """User-facing notification sink for background failures."""

    def storage_write_failed(self, festival_id: str, error: Exception) -> None:
        ...


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
