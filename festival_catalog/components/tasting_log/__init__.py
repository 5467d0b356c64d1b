"""
Tasting log component - Durable per-festival favorites, tries and ratings.
"""

from ._codec import (
    decode_favorite_item,
    encode_favorite_item,
    format_timestamp,
    parse_timestamp,
)
from .component import (
    DEFAULT_FAVORITES_KEY,
    DEFAULT_HIDE_UNAVAILABLE_KEY,
    DEFAULT_RATINGS_KEY,
    DEFAULT_SELECTED_FESTIVAL_KEY,
    PreferencesStore,
    RatingsStore,
    TastingLogStore,
)
from .models import (
    DecodeError,
    InvalidRatingError,
    TastingLogError,
    TastingLogWriteError,
)
from .ports import DiagnosticsPort, KeyValuePort

__all__ = [
    # Stores
    "TastingLogStore",
    "RatingsStore",
    "PreferencesStore",
    # Codec
    "decode_favorite_item",
    "encode_favorite_item",
    "format_timestamp",
    "parse_timestamp",
    # Defaults
    "DEFAULT_FAVORITES_KEY",
    "DEFAULT_RATINGS_KEY",
    "DEFAULT_SELECTED_FESTIVAL_KEY",
    "DEFAULT_HIDE_UNAVAILABLE_KEY",
    # Models
    "DecodeError",
    "TastingLogError",
    "TastingLogWriteError",
    "InvalidRatingError",
    # Ports
    "KeyValuePort",
    "DiagnosticsPort",
]
