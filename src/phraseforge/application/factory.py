"""
Session Factory
Centralizes the logic for selecting storage adapters and wiring services.
"""

import logging
from dataclasses import dataclass

from phraseforge.application.catalog_service import CatalogService
from phraseforge.application.config import AppConfig
from phraseforge.application.phrase_service import PhraseService
from phraseforge.application.review_recorder import ReviewRecorder
from phraseforge.application.stats.service import StatsService
from phraseforge.domain.ports import CatalogRepository, PhraseRepository, StatsStore
from phraseforge.infrastructure.adapters.memory import (
    InMemoryCatalogRepository,
    InMemoryPhraseRepository,
    InMemoryStatsStore,
)
from phraseforge.infrastructure.adapters.yaml_store import YamlDocumentStore

logger = logging.getLogger(__name__)


@dataclass
class StudySession:
    """All services for one user session, sharing one stats cache."""

    phrases: PhraseService
    catalog: CatalogService
    reviews: ReviewRecorder
    stats: StatsService
    seed_defaults: bool = True

    async def initialize(self) -> None:
        if self.seed_defaults:
            await self.catalog.initialize()


def get_repositories(config: AppConfig) -> tuple[PhraseRepository, StatsStore, CatalogRepository]:
    """
    Returns the port implementations selected by config.backend.
    """
    if config.backend == "memory":
        return InMemoryPhraseRepository(), InMemoryStatsStore(), InMemoryCatalogRepository()

    logger.debug(f"Using YAML store at {config.data_path}")
    store = YamlDocumentStore(config.data_path)
    return store.phrases, store.stats, store.catalog


def build_session(config: AppConfig) -> StudySession:
    phrase_repo, stats_store, catalog_repo = get_repositories(config)
    stats = StatsService(phrase_repo, stats_store, ttl_seconds=config.stats_cache_ttl)
    return StudySession(
        phrases=PhraseService(phrase_repo, stats_store, stats),
        catalog=CatalogService(catalog_repo, stats_store),
        reviews=ReviewRecorder(phrase_repo, stats_store, stats),
        stats=stats,
        seed_defaults=config.seed_defaults,
    )
