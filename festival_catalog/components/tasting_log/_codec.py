"""
JSON mapping for FavoriteItem.

Stored shape per drink id:
    {"id", "status": "want_to_try"|"tasted", "tries": [ISO-8601, ...],
     "notes"?, "createdAt": ISO-8601, "updatedAt": ISO-8601}

Decoding never raises: anything unexpected comes back as a DecodeError
for the store to drop. The status is always rederived from the tries, so a
stale or unknown status never costs the entry.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from festival_catalog.domain.entities import FavoriteItem, truncate_to_millis

from .models import DecodeError


def format_timestamp(dt: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a Z suffix."""
    return truncate_to_millis(dt).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return truncate_to_millis(dt)


def encode_favorite_item(item: FavoriteItem) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": item.id,
        "status": item.status,
        "tries": [format_timestamp(t) for t in item.tries],
        "createdAt": format_timestamp(item.created_at),
        "updatedAt": format_timestamp(item.updated_at),
    }
    if item.notes is not None:
        data["notes"] = item.notes
    return data


def decode_favorite_item(drink_id: str, raw: Any) -> FavoriteItem | DecodeError:
    if not isinstance(raw, dict):
        return DecodeError(drink_id, "NOT_AN_OBJECT", "Entry is not a JSON object", raw)

    raw_tries = raw.get("tries")
    if raw_tries is None:
        raw_tries = []
    if not isinstance(raw_tries, list) or not all(isinstance(t, str) for t in raw_tries):
        return DecodeError(drink_id, "INVALID_TRIES", "tries must be a list of strings", raw)

    created = raw.get("createdAt")
    updated = raw.get("updatedAt")
    if not isinstance(created, str) or not isinstance(updated, str):
        return DecodeError(drink_id, "MISSING_TIMESTAMP", "createdAt/updatedAt required", raw)

    try:
        tries = tuple(parse_timestamp(t) for t in raw_tries)
        created_at = parse_timestamp(created)
        updated_at = parse_timestamp(updated)
    except (ValueError, OverflowError) as e:
        return DecodeError(drink_id, "INVALID_TIMESTAMP", str(e), raw)

    # Tries are authoritative; a missing, unknown or contradictory status is rederived
    status = "tasted" if tries else "want_to_try"

    notes = raw.get("notes")
    if notes is not None and not isinstance(notes, str):
        return DecodeError(drink_id, "INVALID_NOTES", "notes must be a string", raw)

    try:
        return FavoriteItem(
            id=drink_id,
            status=status,
            tries=tries,
            notes=notes,
            created_at=created_at,
            updated_at=updated_at,
        )
    except ValidationError as e:
        return DecodeError(drink_id, "INVALID_ITEM", str(e), raw)
