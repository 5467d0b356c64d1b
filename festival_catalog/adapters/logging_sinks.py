"""
Logging-backed diagnostics and notification adapters.

Route recovered anomalies and background write failures into the standard
logging tree so the host app decides where they go.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class LoggingDiagnostics:
    """DiagnosticsPort that logs each report and keeps a short history."""

    def __init__(self, log_level: int = logging.WARNING, history: int = 50) -> None:
        self.log_level = log_level
        self._history = history
        self.events: list[tuple[str, dict[str, Any]]] = []

    def report(self, event: str, detail: dict[str, Any]) -> None:
        logger.log(self.log_level, "Diagnostics event %s: %s", event, detail)
        self.events.append((event, detail))
        del self.events[: -self._history]


class LoggingNotifier:
    """NotificationPort that records write failures for the UI to surface."""

    def __init__(self) -> None:
        self.failures: list[tuple[str, Exception]] = []

    def storage_write_failed(self, festival_id: str, error: Exception) -> None:
        logger.error("Could not save tasting log for festival %s: %s", festival_id, error)
        self.failures.append((festival_id, error))
