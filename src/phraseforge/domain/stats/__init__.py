# Domain Stats Package
from .models import CategoryCount, DailyCount, MasteryLevels, StatsSnapshot, TagCount

__all__ = ["StatsSnapshot", "CategoryCount", "TagCount", "DailyCount", "MasteryLevels"]
