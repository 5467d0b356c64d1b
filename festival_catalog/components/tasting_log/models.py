"""
Tasting log component models and errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DecodeError:
    """A stored favorite entry that could not be decoded."""

    drink_id: str
    code: str
    message: str
    raw: Any = None


class TastingLogError(Exception):
    """Base error for tasting log persistence."""


class TastingLogWriteError(TastingLogError):
    """The backend failed to persist a partition snapshot."""

    def __init__(self, festival_id: str, cause: BaseException) -> None:
        self.festival_id = festival_id
        self.cause = cause
        super().__init__(f"Failed to save tasting log for festival '{festival_id}': {cause}")


class InvalidRatingError(ValueError):
    """Rating outside the 1-5 range."""

    def __init__(self, rating: int) -> None:
        self.rating = rating
        super().__init__(f"Rating must be between 1 and 5 inclusive, got {rating}")
