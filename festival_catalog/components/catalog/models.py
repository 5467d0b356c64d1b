"""
Catalog component models and errors.
"""

from __future__ import annotations

from collections.abc import Callable

CatalogListener = Callable[[], None]


class CatalogFetchError(Exception):
    """
    Raised by catalog sources when the drink list cannot be fetched.

    status_code carries the upstream HTTP status when there is one.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class NoActiveFestivalError(RuntimeError):
    """A festival-scoped operation was called before activate_festival()."""

    def __init__(self) -> None:
        super().__init__("No festival is active; call activate_festival() first")


def user_friendly_error(error: BaseException) -> str:
    """Translate a fetch failure into a message fit for display."""
    if isinstance(error, CatalogFetchError):
        code = error.status_code
        if code == 404:
            return "Festival data not found. Please try a different festival."
        if code is not None and code >= 500:
            return "Server error. Please try again later."
        if code is not None and code >= 400:
            return "Could not load drinks. Please try again."
        return "Could not load drinks. Please check your connection."
    if isinstance(error, TimeoutError):
        return "Request timed out. Please check your connection and try again."
    if isinstance(error, ConnectionError):
        return "No internet connection. Please check your network."
    return "Something went wrong. Please try again."
