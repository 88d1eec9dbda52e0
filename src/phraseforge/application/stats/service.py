"""
Stats Service: Application layer orchestrator.

Reads the phrase collection and persisted counters through the ports and
caches the aggregated snapshot for a freshness window. Every mutating path
in the application calls invalidate() so a known change is never hidden by
the cache.
"""

import logging
import time
from collections.abc import Callable
from datetime import datetime

from phraseforge.application.utils.dates import start_of_day
from phraseforge.domain.constants import STATS_CACHE_TTL
from phraseforge.domain.ports import PhraseRepository, StatsStore
from phraseforge.domain.stats.models import StatsSnapshot

from .aggregator import StatsAggregator

logger = logging.getLogger(__name__)


class StatsService:
    """
    Application service for aggregate statistics.

    Follows Dependency Inversion: depends on the repository abstractions,
    not concrete adapter implementations.
    """

    def __init__(
        self,
        phrase_repo: PhraseRepository,
        stats_store: StatsStore,
        aggregator: StatsAggregator | None = None,
        ttl_seconds: float = STATS_CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            phrase_repo: Source of the phrase collection.
            stats_store: Source of the persisted counters.
            aggregator: Optional custom aggregator; uses default if not provided.
            ttl_seconds: How long a computed snapshot stays fresh. 0 disables caching.
            clock: Monotonic time source, injectable for tests.
        """
        self._phrases = phrase_repo
        self._stats = stats_store
        self._agg = aggregator or StatsAggregator()
        self._ttl = ttl_seconds
        self._clock = clock
        self._cached: StatsSnapshot | None = None
        self._cached_at: float | None = None
        self._cached_day: datetime | None = None

    @property
    def is_cached(self) -> bool:
        if self._cached is None or self._cached_at is None:
            return False
        return (self._clock() - self._cached_at) < self._ttl

    def invalidate(self) -> None:
        """Drop the cached snapshot. Synchronous so callers cannot forget to await it."""
        if self._cached is not None:
            logger.debug("Stats cache invalidated")
        self._cached = None
        self._cached_at = None
        self._cached_day = None

    async def get_stats(self, now: datetime | None = None) -> StatsSnapshot:
        """
        Return the cached snapshot while fresh, otherwise recompute.

        A snapshot only serves the calendar day it was computed for.
        """
        now = now or datetime.now()
        day = start_of_day(now)
        if self.is_cached and self._cached_day == day:
            return self._cached  # type: ignore[return-value]

        phrases = await self._phrases.get_all()
        counters = await self._stats.get()
        snapshot = self._agg.compute(phrases, counters, now)

        self._cached = snapshot
        self._cached_at = self._clock()
        self._cached_day = day
        logger.debug(f"Stats recomputed for {len(phrases)} phrases")
        return snapshot

    async def refresh(self, now: datetime | None = None) -> StatsSnapshot:
        self.invalidate()
        return await self.get_stats(now)
