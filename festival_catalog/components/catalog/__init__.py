"""
Catalog component - Session orchestration of catalog, filters, sort and log.
"""

from .component import CatalogOrchestrator
from .models import (
    CatalogFetchError,
    CatalogListener,
    NoActiveFestivalError,
    user_friendly_error,
)
from .ports import CatalogSourcePort, NotificationPort, TimePort

__all__ = [
    # Orchestrator
    "CatalogOrchestrator",
    # Models
    "CatalogFetchError",
    "CatalogListener",
    "NoActiveFestivalError",
    "user_friendly_error",
    # Ports
    "CatalogSourcePort",
    "NotificationPort",
    "TimePort",
]
