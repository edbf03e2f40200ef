# src/studygroup_service/infrastructure/database/repositories/base.py
from typing import TypeVar, Generic, Any, Optional
from uuid import uuid4
from contextlib import asynccontextmanager
import logging

from sqlalchemy import Select, insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from studygroup_service.infrastructure.database.base_model import BaseModel, utcnow

T = TypeVar("T", bound=SQLModel)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Base repository over a single SQLModel table.

    Provides the primitives the entity repositories share: ORM create, an
    insert that tolerates unique-key races, and a commit/rollback
    transaction boundary for the session.

    Example:
        class TagRepository(BaseRepository[TagRecord]):
            def __init__(self, session: AsyncSession):
                super().__init__(TagRecord, session)

            async def find_by_title(self, title: str) -> TagRecord | None:
                query = select(self.model).where(self.model.title == title)
                result = await self.session.execute(query)
                return result.scalars().first()
    """

    def __init__(self, model: type[T], session: AsyncSession, enable_query_logging: bool = False):
        self.model = model
        self.session = session
        self.enable_query_logging = enable_query_logging

    def _log_query(self, query: Select, params: dict = None) -> None:
        """Log SQL query with parameters for debugging."""
        if self.enable_query_logging:
            logger.debug(f"Query: {query}")
            if params:
                logger.debug(f"Params: {params}")

    async def create(self, entity: T) -> T:
        """
        Create new entity.

        Args:
            entity: Entity to create

        Returns:
            Created entity with generated ID and timestamps
        """
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    @property
    def dialect_name(self) -> str:
        return self.session.get_bind().dialect.name

    async def insert_ignore(
        self,
        values: dict[str, Any],
        conflict_columns: list[str],
        model: Optional[type[SQLModel]] = None,
    ) -> bool:
        """
        Insert a row unless it collides with an existing unique key.

        Two writers inserting the same key both succeed; exactly one row
        results. Uses ``ON CONFLICT DO NOTHING`` on PostgreSQL and SQLite,
        and a savepoint around a plain insert elsewhere.

        Args:
            values: Column values for the new row
            conflict_columns: Columns of the unique key that may collide
            model: Table to insert into (defaults to this repository's model)

        Returns:
            True if a row was inserted, False if the key already existed
        """
        model = model or self.model
        table = model.__table__

        if issubclass(model, BaseModel):
            now = utcnow()
            values = {"id": uuid4(), "created_at": now, "updated_at": now, **values}

        dialect = self.dialect_name
        if dialect in ("postgresql", "sqlite"):
            dialect_insert = pg_insert if dialect == "postgresql" else sqlite_insert
            stmt = (
                dialect_insert(table)
                .values(**values)
                .on_conflict_do_nothing(index_elements=conflict_columns)
            )
            self._log_query(stmt, values)
            result = await self.session.execute(stmt)
            return result.rowcount == 1

        stmt = insert(table).values(**values)
        self._log_query(stmt, values)
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError:
            logger.debug(f"Row already present in {table.name}", extra={"columns": conflict_columns})
            return False
        return True

    @asynccontextmanager
    async def transaction(self):
        """
        Context manager for explicit transaction handling.

        Every repository built on the same session shares the boundary.

        Example:
            async with accounts.transaction():
                await tags.save(tag)
                await accounts.save(account)
                # Commits on success, rolls back on exception
        """
        try:
            yield
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
