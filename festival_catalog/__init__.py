"""
Festival catalog domain layer.

Filtering, sorting and the per-festival tasting log behind a festival
drink-catalog browsing app.
"""

__version__ = "0.1.0"
