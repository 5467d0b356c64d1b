"""
Tasting log state machine.

States: absent, want_to_try, tasted.

Every function takes the current partition and returns a NEW partition plus
a flag telling the caller whether anything changed. Operations on ids that
are not in the log (or on try timestamps that do not exist) are no-ops and
never create entries.
"""

from __future__ import annotations

from datetime import datetime

from festival_catalog.domain.entities import (
    UNCHANGED,
    FavoriteItem,
    NotesUpdate,
    TastingPartition,
    truncate_to_millis,
)


def new_want_to_try(drink_id: str, now: datetime) -> FavoriteItem:
    return FavoriteItem(
        id=drink_id,
        status="want_to_try",
        tries=(),
        created_at=now,
        updated_at=now,
    )


def toggle_favorite(
    partition: TastingPartition, drink_id: str, now: datetime
) -> tuple[TastingPartition, bool]:
    """
    absent -> want_to_try; want_to_try (no tries) -> absent.

    A tasted item still has tries, so toggling it off is refused.
    """
    existing = partition.get(drink_id)
    if existing is None:
        updated = dict(partition)
        updated[drink_id] = new_want_to_try(drink_id, now)
        return updated, True

    if existing.tries:
        return partition, False

    updated = dict(partition)
    del updated[drink_id]
    return updated, True


def mark_tasted(
    partition: TastingPartition, drink_id: str, now: datetime
) -> tuple[TastingPartition, bool]:
    """Append a try; want_to_try -> tasted, tasted -> tasted."""
    now = truncate_to_millis(now)
    existing = partition.get(drink_id)
    updated = dict(partition)

    if existing is None:
        # Not in the log yet: goes straight to tasted
        updated[drink_id] = FavoriteItem(
            id=drink_id,
            status="tasted",
            tries=(now,),
            created_at=now,
            updated_at=now,
        )
    else:
        updated[drink_id] = existing.with_changes(
            status="tasted",
            tries=(*existing.tries, now),
            updated_at=now,
        )
    return updated, True


def delete_try(
    partition: TastingPartition,
    drink_id: str,
    timestamp: datetime,
    now: datetime,
) -> tuple[TastingPartition, bool]:
    """
    Remove a try, matched at millisecond precision.

    tasted -> tasted while tries remain; tasted -> want_to_try when the
    last try goes. The entry itself is kept.
    """
    existing = partition.get(drink_id)
    if existing is None:
        return partition, False

    target = truncate_to_millis(timestamp)
    if target not in existing.tries:
        return partition, False

    # Every try recorded in that millisecond goes
    remaining = [t for t in existing.tries if t != target]

    updated = dict(partition)
    updated[drink_id] = existing.with_changes(
        status="tasted" if remaining else "want_to_try",
        tries=tuple(remaining),
        updated_at=now,
    )
    return updated, True


def update_notes(
    partition: TastingPartition,
    drink_id: str,
    notes: NotesUpdate,
    now: datetime,
) -> tuple[TastingPartition, bool]:
    existing = partition.get(drink_id)
    if existing is None or notes is UNCHANGED:
        return partition, False

    updated = dict(partition)
    updated[drink_id] = existing.with_changes(notes=notes, updated_at=now)
    return updated, True


def favorite_ids(partition: TastingPartition) -> frozenset[str]:
    """Ids present in the log, regardless of status."""
    return frozenset(partition)
