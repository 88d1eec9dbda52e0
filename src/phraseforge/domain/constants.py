"""Centralized constants for PhraseForge.

All magic numbers and scheduling defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Reviews ----------
DEFAULT_DIFFICULTY = 0.5
MIN_DIFFICULTY = 0.0
MAX_DIFFICULTY = 1.0

# ---------- Recommender ----------
SUCCESS_WINDOW = 5  # most recent reviews considered
PROMOTE_THRESHOLD = 0.9
HOLD_THRESHOLD = 0.7

# ---------- Next-date policy (day counts) ----------
DAY_STEP_LIMIT = 7
WEEK_STEP_LIMIT = 14
DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30

# ---------- Statistics ----------
STATS_CACHE_TTL = 300.0  # seconds
DAILY_STATS_WINDOW = 30  # trailing calendar days, today included
BEGINNER_MAX_REVIEWS = 2
INTERMEDIATE_MAX_REVIEWS = 5

# ---------- Duplicate detection ----------
EXACT_SIMILARITY = 1.0
ENGLISH_ONLY_SIMILARITY = 0.9
SIMILARITY_THRESHOLD = 0.8

# ---------- Catalog seed ----------
DEFAULT_CATEGORIES = [
    {"id": "daily", "name": "Daily conversation", "color": "#3B82F6", "icon": "💬"},
    {"id": "business", "name": "Business", "color": "#10B981", "icon": "💼"},
    {"id": "travel", "name": "Travel", "color": "#F59E0B", "icon": "✈️"},
]
DEFAULT_CATEGORY_ID = "daily"
