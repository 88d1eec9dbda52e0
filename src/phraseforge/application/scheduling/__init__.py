# Application Scheduling Package
from .due_set import get_due_set, is_due
from .next_date import add_interval_days, describe_next_review, next_review_date
from .recommender import recommend_interval, success_rate

__all__ = [
    "get_due_set",
    "is_due",
    "next_review_date",
    "add_interval_days",
    "describe_next_review",
    "recommend_interval",
    "success_rate",
]
