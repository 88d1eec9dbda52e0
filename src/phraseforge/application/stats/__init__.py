# Application Stats Package
from .aggregator import StatsAggregator, compute_stats, mastery_level
from .service import StatsService

__all__ = ["StatsAggregator", "StatsService", "compute_stats", "mastery_level"]
