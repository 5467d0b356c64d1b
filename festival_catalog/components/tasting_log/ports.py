"""
Tasting log component port definitions.
"""

from __future__ import annotations

from typing import Any, Protocol


class KeyValuePort(Protocol):
    """Opaque string key-value persistence backend."""

    def get_string(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    def set_string(self, key: str, value: str) -> None:
        """
        Store value under key, replacing any previous value.

        Must be atomic: a concurrent reader sees either the old value or
        the new one, never a partial write.
        """
        ...

    def remove(self, key: str) -> None:
        """Delete key; missing keys are ignored."""
        ...


class DiagnosticsPort(Protocol):
    """Sink for recovered anomalies (corrupt data, dropped entries)."""

    def report(self, event: str, detail: dict[str, Any]) -> None:
        ...
