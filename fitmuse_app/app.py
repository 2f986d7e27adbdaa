"""FitMuse app bootstrap."""

from __future__ import annotations

import logging

from agents.closet_ingestion import ClosetIngestionAgent
from agents.collage_detector import CollageDetectorAgent
from agents.garment_analyzer import GarmentAnalyzerAgent
from agents.inspiration_analyzer import InspirationAnalyzerAgent
from agents.outfit_illustrator import OutfitIllustratorAgent
from agents.outfit_selector import OutfitSelectorAgent
from fitmuse_app.config import AppConfig
from fitmuse_app.logging_config import configure_logging, get_logger, log_event
from memory.session_store import JSONSessionStore, SessionManager, SessionStore, SQLiteSessionStore
from tools.ai_client import AIClient, build_ai_client
from tools.outfit_store import SQLiteOutfitStore
from tools.reference_store import SQLiteReferenceStore, seed_reference_data
from tools.user_store import SQLiteUserStore

LOGGER = get_logger(__name__)


class FitMuseApp:
    """Wires together the AI client, agents and stores.

    One AI client is built per process and shared by every agent; pass
    ``ai_client`` to substitute a fake in tests.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        ai_client: AIClient | None = None,
        seed_reference: bool = True,
    ) -> None:
        self.config = config or AppConfig.from_env()
        configure_logging()

        self.ai_client = ai_client or build_ai_client(self.config)
        self.reference_store = SQLiteReferenceStore(self.config.database_path)
        self.outfit_store = SQLiteOutfitStore(self.config.database_path)
        self.user_store = SQLiteUserStore(self.config.database_path)
        self.session_store = self._build_session_store()
        self.session_manager = SessionManager(
            store=self.session_store,
            ttl_seconds=self.config.session_ttl_seconds,
        )
        self.session_manager.purge_expired()
        if seed_reference:
            self._seed_reference_data()

        self.garment_analyzer = GarmentAnalyzerAgent(self.ai_client)
        self.collage_detector = CollageDetectorAgent(self.ai_client)
        self.inspiration_analyzer = InspirationAnalyzerAgent(self.ai_client)
        self.outfit_selector = OutfitSelectorAgent(self.ai_client, self.reference_store)
        self.outfit_illustrator = OutfitIllustratorAgent(self.ai_client)
        self.closet_ingestion = ClosetIngestionAgent(
            collage_detector=self.collage_detector,
            garment_analyzer=self.garment_analyzer,
        )

        log_event(
            LOGGER,
            level=logging.INFO,
            event="app_initialized",
            ai_provider=self.config.ai_provider,
            model=self.config.model,
            environment=self.config.environment or "local",
        )

    def _build_session_store(self) -> SessionStore:
        backend = self.config.session_backend.lower()
        if backend == "sqlite":
            return SQLiteSessionStore(self.config.database_path)
        if backend == "json":
            return JSONSessionStore(self.config.session_dir)
        raise ValueError(f"Unsupported session backend '{backend}'. Allowed: sqlite, json")

    def _seed_reference_data(self) -> None:
        if self.reference_store.list_moodboards() and self.reference_store.list_style_vibes():
            return
        seeded = seed_reference_data(self.reference_store)
        if seeded["failed"]:
            LOGGER.warning("Some reference rows failed to seed", extra={"failed_rows": seeded["failed"]})


__all__ = ["FitMuseApp"]
