from datetime import datetime, timedelta

import pytest

from phraseforge.application.phrase_service import PhraseService
from phraseforge.application.review_recorder import ReviewRecorder
from phraseforge.application.stats.service import StatsService
from phraseforge.domain.intervals import ReviewInterval
from phraseforge.domain.models import Phrase, ReviewRecord
from phraseforge.infrastructure.adapters.memory import (
    InMemoryPhraseRepository,
    InMemoryStatsStore,
)

NOW = datetime(2024, 1, 15, 10, 30)


def _make_phrase(
    phrase_id: str = "p1",
    next_review_date: datetime = NOW,
    history: list[ReviewRecord] | None = None,
    **kwargs,
) -> Phrase:
    defaults = dict(
        english="How are you doing?",
        japanese="元気ですか？",
        category_id="daily",
        tags=["greeting"],
        created_at=datetime(2024, 1, 1),
        updated_at=datetime(2024, 1, 1),
    )
    defaults.update(kwargs)
    return Phrase(
        id=phrase_id,
        next_review_date=next_review_date,
        review_history=history or [],
        **defaults,
    )


def _make_history(*difficulties: float, interval=ReviewInterval.TOMORROW, start=NOW):
    """One record per difficulty, a day apart, all with the same interval."""
    return [
        ReviewRecord(date=start + timedelta(days=i), interval=interval, difficulty=d)
        for i, d in enumerate(difficulties)
    ]


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_phrase():
    return _make_phrase


@pytest.fixture
def make_history():
    return _make_history


@pytest.fixture
def phrase_repo():
    return InMemoryPhraseRepository()


@pytest.fixture
def stats_store():
    return InMemoryStatsStore()


@pytest.fixture
def stats_service(phrase_repo, stats_store):
    return StatsService(phrase_repo, stats_store)


@pytest.fixture
def phrase_service(phrase_repo, stats_store, stats_service):
    return PhraseService(phrase_repo, stats_store, stats_service)


@pytest.fixture
def recorder(phrase_repo, stats_store, stats_service):
    return ReviewRecorder(phrase_repo, stats_store, stats_service)


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config and data files
    monkeypatch.setenv("HOME", str(home))
    for key in ("PHRASEFORGE_BACKEND", "PHRASEFORGE_DATA_PATH", "PHRASEFORGE_STATS_CACHE_TTL"):
        monkeypatch.delenv(key, raising=False)
    return home
