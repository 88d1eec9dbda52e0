from datetime import datetime

import pytest
import yaml

from phraseforge.domain.errors import PersistenceError, PhraseNotFoundError
from phraseforge.domain.intervals import ReviewInterval
from phraseforge.domain.models import Category, ReviewRecord, Tag, UserStats
from phraseforge.infrastructure.adapters.yaml_store import YamlDocumentStore


@pytest.fixture
def store(tmp_path):
    return YamlDocumentStore(tmp_path / "nested" / "phrases.yaml")


@pytest.mark.asyncio
async def test_missing_file_reads_as_empty(store):
    assert await store.phrases.get_all() == []
    assert await store.stats.get() == UserStats()
    assert await store.catalog.count_categories() == 0
    assert not store.path.exists()


@pytest.mark.asyncio
async def test_phrase_round_trip(store, make_phrase):
    record = ReviewRecord(
        date=datetime(2024, 1, 2, 8, 15), interval=ReviewInterval.ONE_WEEK, difficulty=0.25
    )
    phrase = make_phrase("p1", history=[record], pronunciation="genki desu ka")

    await store.phrases.add(phrase)

    assert store.path.exists()
    assert await store.phrases.get_by_id("p1") == phrase
    assert await YamlDocumentStore(store.path).phrases.get_all() == [phrase]


@pytest.mark.asyncio
async def test_file_is_readable_yaml(store, make_phrase):
    await store.phrases.add(make_phrase("p1"))

    doc = yaml.safe_load(store.path.read_text(encoding="utf-8"))

    assert doc["version"] == 1
    assert doc["phrases"][0]["japanese"] == "元気ですか？"
    assert doc["phrases"][0]["next_review_date"] == "2024-01-15T10:30:00"
    assert "元気ですか" in store.path.read_text(encoding="utf-8")


@pytest.mark.asyncio
async def test_update_and_delete(store, make_phrase):
    await store.phrases.add(make_phrase("p1"))
    await store.phrases.add(make_phrase("p2"))

    updated = await store.phrases.update("p2", {"tags": ["travel"]})
    await store.phrases.delete("p1")

    assert updated.tags == ["travel"]
    assert [p.id for p in await store.phrases.get_all()] == ["p2"]
    with pytest.raises(PhraseNotFoundError):
        await store.phrases.update("p1", {"english": "x"})
    with pytest.raises(PhraseNotFoundError):
        await store.phrases.delete("p1")
    with pytest.raises(PersistenceError):
        await store.phrases.add(make_phrase("p2"))


@pytest.mark.asyncio
async def test_sections_share_one_document(store, make_phrase):
    await store.phrases.add(make_phrase("p1"))
    await store.stats.save(UserStats(total_reviews=3, last_review_date=datetime(2024, 1, 3)))
    await store.catalog.add_category(Category(id="daily", name="Daily"))
    await store.catalog.add_tag(Tag(id="t1", name="polite"))

    reopened = YamlDocumentStore(store.path)
    assert [p.id for p in await reopened.phrases.get_all()] == ["p1"]
    assert (await reopened.stats.get()).last_review_date == datetime(2024, 1, 3)
    assert [c.name for c in await reopened.catalog.get_categories()] == ["Daily"]
    assert [t.name for t in await reopened.catalog.get_tags()] == ["polite"]


@pytest.mark.asyncio
async def test_unknown_interval_is_kept_as_text(tmp_path, caplog):
    path = tmp_path / "phrases.yaml"
    path.write_text(
        """
phrases:
  - id: legacy
    english: Hello
    japanese: こんにちは
    category_id: daily
    next_review_date: "2024-01-01T00:00:00"
    created_at: "2023-12-01T00:00:00"
    updated_at: "2023-12-01T00:00:00"
    review_history:
      - date: "2023-12-25T09:00:00"
        interval: fortnight
""",
        encoding="utf-8",
    )

    phrase = await YamlDocumentStore(path).phrases.get_by_id("legacy")

    record = phrase.review_history[0]
    assert record.interval == "fortnight"
    assert not isinstance(record.interval, ReviewInterval)
    assert record.difficulty == 0.5
    assert phrase.tags == []
    assert "fortnight" in caplog.text


@pytest.mark.asyncio
async def test_corrupt_file_raises_persistence_error(tmp_path):
    path = tmp_path / "phrases.yaml"
    path.write_text("phrases: [unclosed", encoding="utf-8")

    with pytest.raises(PersistenceError):
        await YamlDocumentStore(path).phrases.get_all()


@pytest.mark.asyncio
async def test_non_mapping_document_rejected(tmp_path):
    path = tmp_path / "phrases.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(PersistenceError, match="not a mapping"):
        await YamlDocumentStore(path).stats.get()


@pytest.mark.asyncio
async def test_malformed_date_raises_persistence_error(tmp_path):
    path = tmp_path / "phrases.yaml"
    path.write_text(
        """
phrases:
  - id: broken
    english: Hello
    japanese: こんにちは
    next_review_date: notadate
    created_at: "2023-12-01T00:00:00"
    updated_at: "2023-12-01T00:00:00"
""",
        encoding="utf-8",
    )
    store = YamlDocumentStore(path)

    with pytest.raises(PersistenceError, match="Malformed"):
        await store.phrases.get_all()
    with pytest.raises(PersistenceError, match="Malformed"):
        await store.phrases.get_by_id("broken")


@pytest.mark.asyncio
async def test_missing_required_field_raises_persistence_error(tmp_path):
    path = tmp_path / "phrases.yaml"
    path.write_text(
        "categories:\n  - id: daily\n    created_at: '2024-01-01T00:00:00'\n"
        "stats:\n  total_reviews: many\n",
        encoding="utf-8",
    )
    store = YamlDocumentStore(path)

    with pytest.raises(PersistenceError):
        await store.catalog.get_categories()
    with pytest.raises(PersistenceError):
        await store.stats.get()
