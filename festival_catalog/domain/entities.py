from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# --- Enums / Literals ---
AvailabilityStatus = Literal["plenty", "low", "out", "not_yet_available"]
FavoriteStatus = Literal["want_to_try", "tasted"]
SortKey = Literal["name_asc", "name_desc", "abv_high", "abv_low", "brewery", "style"]

SORT_KEYS: tuple[SortKey, ...] = (
    "name_asc",
    "name_desc",
    "abv_high",
    "abv_low",
    "brewery",
    "style",
)


def truncate_to_millis(dt: datetime) -> datetime:
    """Drop sub-millisecond precision and normalise to UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    dt = dt.astimezone(UTC)
    return dt.replace(microsecond=(dt.microsecond // 1000) * 1000)


# --- Catalog ---


class Drink(BaseModel):
    """Read-only catalog entry, replaced wholesale on every catalog refresh."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: str = "beer"
    style: str | None = None
    abv: float = Field(default=0.0, ge=0.0)
    brewery_name: str = ""
    brewery_location: str = ""
    availability_status: AvailabilityStatus | None = None
    rating: int | None = Field(default=None, ge=1, le=5)
    notes: str | None = None

    dispense: str = "cask"
    status_text: str | None = None
    bar: str | None = None
    allergens: dict[str, int] = Field(default_factory=dict)

    @property
    def allergen_text(self) -> str | None:
        present = [name.capitalize() for name, flag in self.allergens.items() if flag == 1 and name]
        if not present:
            return None
        return ", ".join(present)


# --- Tri-state notes update ---


class _Unchanged:
    _instance: _Unchanged | None = None

    def __new__(cls) -> _Unchanged:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNCHANGED"


UNCHANGED = _Unchanged()


@dataclass(frozen=True)
class SetTo:
    """Replace an optional field; SetTo(None) clears it."""

    value: str | None


NotesUpdate = _Unchanged | SetTo


# --- Tasting Log ---


class FavoriteItem(BaseModel):
    """
    A drink in the festival tasting log.

    Invariant: status == "tasted" if and only if tries is non-empty.
    Tries are kept in chronological order at millisecond precision.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    status: FavoriteStatus = "want_to_try"
    tries: tuple[datetime, ...] = ()
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator("tries", mode="after")
    @classmethod
    def _normalise_tries(cls, value: tuple[datetime, ...]) -> tuple[datetime, ...]:
        return tuple(sorted(truncate_to_millis(t) for t in value))

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def _normalise_stamp(cls, value: datetime) -> datetime:
        return truncate_to_millis(value)

    @model_validator(mode="after")
    def _status_matches_tries(self) -> FavoriteItem:
        if (self.status == "tasted") != (len(self.tries) > 0):
            raise ValueError(
                f"status '{self.status}' inconsistent with {len(self.tries)} tries"
            )
        return self

    @property
    def try_count(self) -> int:
        return len(self.tries)

    def with_changes(
        self,
        *,
        status: FavoriteStatus | None = None,
        tries: tuple[datetime, ...] | None = None,
        notes: NotesUpdate = UNCHANGED,
        updated_at: datetime | None = None,
    ) -> FavoriteItem:
        """
        Return a NEW FavoriteItem with the given fields replaced.

        Notes use an explicit tri-state: UNCHANGED (the default) keeps them,
        SetTo(None) clears them, SetTo("text") replaces them.
        """
        data: dict[str, Any] = self.model_dump()
        if status is not None:
            data["status"] = status
        if tries is not None:
            data["tries"] = tries
        if isinstance(notes, SetTo):
            data["notes"] = notes.value
        if updated_at is not None:
            data["updated_at"] = updated_at
        # Re-validate so the status/tries invariant holds on every copy
        return FavoriteItem.model_validate(data)


TastingPartition = dict[str, FavoriteItem]
