from __future__ import annotations

from dataclasses import dataclass

from festival_catalog.adapters.clock import SystemClock
from festival_catalog.adapters.json_file_kv import create_file_store
from festival_catalog.adapters.logging_sinks import LoggingDiagnostics, LoggingNotifier
from festival_catalog.components.catalog import (
    CatalogOrchestrator,
    CatalogSourcePort,
    TimePort,
)
from festival_catalog.components.tasting_log import (
    KeyValuePort,
    PreferencesStore,
    RatingsStore,
    TastingLogStore,
)
from festival_catalog.rules.models import Rules


@dataclass
class SessionContext:
    """Everything one browsing session needs, wired from the rules."""

    orchestrator: CatalogOrchestrator
    tasting_store: TastingLogStore
    ratings_store: RatingsStore
    preferences: PreferencesStore
    backend: KeyValuePort
    diagnostics: LoggingDiagnostics
    notifier: LoggingNotifier
    rules: Rules

    @classmethod
    def create(
        cls,
        source: CatalogSourcePort,
        rules: Rules | None = None,
        *,
        backend: KeyValuePort | None = None,
        time_port: TimePort | None = None,
    ) -> SessionContext:
        rules = rules or Rules()
        storage = rules.storage

        if backend is None:
            backend = create_file_store(
                env_var=storage.data_dir_env,
                default_path=storage.default_data_dir,
            )

        diagnostics = LoggingDiagnostics()
        notifier = LoggingNotifier()

        tasting_store = TastingLogStore(
            backend,
            diagnostics=diagnostics,
            key_template=storage.favorites_key,
        )
        ratings_store = RatingsStore(backend, key_template=storage.ratings_key)
        preferences = PreferencesStore(
            backend,
            selected_festival_key=storage.selected_festival_key,
            hide_unavailable_key=storage.hide_unavailable_key,
        )

        orchestrator = CatalogOrchestrator(
            source=source,
            tasting_store=tasting_store,
            ratings_store=ratings_store,
            preferences=preferences,
            notifier=notifier,
            time_port=time_port or SystemClock(),
            rules=rules.catalog,
        )

        return cls(
            orchestrator=orchestrator,
            tasting_store=tasting_store,
            ratings_store=ratings_store,
            preferences=preferences,
            backend=backend,
            diagnostics=diagnostics,
            notifier=notifier,
            rules=rules,
        )
