"""
Festival catalog payload parsing.

The upstream feed is a list of producers, each carrying its products:

    {"producers": [{"id", "name", "location", "products": [
        {"id", "name", "category", "style", "abv", "dispense",
         "notes", "status_text", "bar", "allergens"}]}]}

Upstream values are loosely typed (abv as string or number, bar as string,
int or bool), so every field is coerced rather than trusted.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from festival_catalog.components.catalog import CatalogFetchError
from festival_catalog.domain.entities import AvailabilityStatus, Drink

logger = logging.getLogger(__name__)


def availability_from_status_text(status_text: str | None) -> AvailabilityStatus | None:
    if status_text is None:
        return None
    lower = status_text.lower()
    if "not yet" in lower:
        return "not_yet_available"
    if "plenty" in lower or "arrived" in lower or "available" in lower:
        return "plenty"
    if "remaining" in lower or "nearly" in lower or "low" in lower:
        return "low"
    if "out" in lower or "sold" in lower:
        return "out"
    return "plenty"


def _parse_abv(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return max(0.0, float(value))
    if isinstance(value, str):
        try:
            return max(0.0, float(value))
        except ValueError:
            return 0.0
    return 0.0


def _parse_bar(value: Any) -> str | None:
    # Booleans are ignored
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int)):
        return str(value)
    return None


def _parse_allergens(value: Any) -> dict[str, int]:
    if not isinstance(value, dict):
        return {}
    allergens: dict[str, int] = {}
    for name, flag in value.items():
        if isinstance(flag, bool):
            allergens[name] = 1 if flag else 0
        elif isinstance(flag, (int, float)):
            allergens[name] = int(flag)
    return allergens


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def drink_from_product(product: dict[str, Any], producer: dict[str, Any]) -> Drink:
    status_text = _optional_str(product.get("status_text"))
    return Drink(
        id=str(product["id"]),
        name=str(product["name"]),
        category=str(product.get("category") or "beer"),
        style=_optional_str(product.get("style")),
        abv=_parse_abv(product.get("abv")),
        brewery_name=str(producer.get("name", "")),
        brewery_location=str(producer.get("location") or ""),
        availability_status=availability_from_status_text(status_text),
        notes=_optional_str(product.get("notes")),
        dispense=str(product.get("dispense") or "cask"),
        status_text=status_text,
        bar=_parse_bar(product.get("bar")),
        allergens=_parse_allergens(product.get("allergens")),
    )


def drinks_from_payload(payload: Any) -> list[Drink]:
    """
    Flatten a producers payload into drinks.

    Products missing an id or name are skipped and logged.
    """
    producers = payload.get("producers", []) if isinstance(payload, dict) else payload
    if not isinstance(producers, list):
        raise CatalogFetchError("Catalog payload has no producer list")

    drinks: list[Drink] = []
    for producer in producers:
        if not isinstance(producer, dict):
            continue
        for product in producer.get("products") or []:
            if not isinstance(product, dict) or "id" not in product or "name" not in product:
                logger.warning("Skipping malformed product in producer %s", producer.get("id"))
                continue
            drinks.append(drink_from_product(product, producer))
    return drinks


class JsonFileCatalogSource:
    """CatalogSourcePort reading {base_path}/{festival_id}.json payloads."""

    def __init__(self, base_path: str | Path) -> None:
        self.base_path = Path(base_path)

    def fetch_drinks(self, festival_id: str) -> Sequence[Drink]:
        path = self.base_path / f"{festival_id}.json"
        if not path.exists():
            raise CatalogFetchError(f"No catalog for festival {festival_id}", status_code=404)
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogFetchError(f"Unreadable catalog for festival {festival_id}: {e}") from e
        return drinks_from_payload(payload)
