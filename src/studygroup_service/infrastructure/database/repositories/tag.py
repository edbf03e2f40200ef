# src/studygroup_service/infrastructure/database/repositories/tag.py
"""Tag repository with get-or-create semantics on the unique title."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studygroup_service.domain.exceptions import DatabaseError
from studygroup_service.domain.models import Tag
from studygroup_service.infrastructure.database.models import TagRecord
from studygroup_service.infrastructure.database.repositories.base import BaseRepository
from studygroup_service.interfaces import ITagRepository


class TagRepository(BaseRepository[TagRecord], ITagRepository):
    """Repository for tags keyed by title."""

    def __init__(self, session: AsyncSession, enable_query_logging: bool = False):
        super().__init__(TagRecord, session, enable_query_logging)

    async def find_by_title(self, title: str) -> Tag | None:
        query = select(TagRecord).where(TagRecord.title == title)
        self._log_query(query, {"title": title})
        result = await self.session.execute(query)
        record = result.scalars().first()
        return Tag(title=record.title) if record else None

    async def save(self, tag: Tag) -> Tag:
        """
        Store the tag unless its title is already taken.

        Concurrent saves of one new title leave a single row and both
        callers get the stored tag back.
        """
        await self.insert_ignore({"title": tag.title}, conflict_columns=["title"])

        stored = await self.find_by_title(tag.title)
        if stored is None:
            raise DatabaseError(f"Tag {tag.title!r} missing after insert")
        return stored

    async def find_all_titles(self) -> list[str]:
        query = select(TagRecord.title).order_by(TagRecord.title)
        result = await self.session.execute(query)
        return list(result.scalars().all())
