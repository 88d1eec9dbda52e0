"""Categories, tags and first-run seeding."""

import logging
from datetime import datetime

from phraseforge.application.id_service import generate_id
from phraseforge.domain.constants import DEFAULT_CATEGORIES
from phraseforge.domain.errors import ValidationError
from phraseforge.domain.models import Category, Tag, UserStats
from phraseforge.domain.ports import CatalogRepository, StatsStore

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, catalog_repo: CatalogRepository, stats_store: StatsStore):
        self._catalog = catalog_repo
        self._stats = stats_store

    async def initialize(self, now: datetime | None = None) -> bool:
        """
        Seed the default categories and a zeroed counter record on first run.

        Returns True if seeding happened, False if the catalog already had data.
        """
        if await self._catalog.count_categories() > 0:
            return False

        now = now or datetime.now()
        for spec in DEFAULT_CATEGORIES:
            await self._catalog.add_category(Category(**spec, created_at=now, updated_at=now))
        await self._stats.save(UserStats())
        logger.info(f"Seeded {len(DEFAULT_CATEGORIES)} default categories")
        return True

    async def add_category(
        self,
        name: str,
        color: str | None = None,
        icon: str | None = None,
        now: datetime | None = None,
    ) -> Category:
        if not name or not name.strip():
            raise ValidationError("Category name must be a non-empty string")
        now = now or datetime.now()
        category = Category(
            id=generate_id("category"),
            name=name.strip(),
            color=color,
            icon=icon,
            created_at=now,
            updated_at=now,
        )
        await self._catalog.add_category(category)
        return category

    async def add_tag(self, name: str, color: str | None = None) -> Tag:
        if not name or not name.strip():
            raise ValidationError("Tag name must be a non-empty string")
        tag = Tag(id=generate_id("tag"), name=name.strip(), color=color)
        await self._catalog.add_tag(tag)
        return tag

    async def categories(self) -> list[Category]:
        return await self._catalog.get_categories()

    async def tags(self) -> list[Tag]:
        return await self._catalog.get_tags()
