# src/studygroup_service/infrastructure/database/repositories/account.py
"""
Account repository.

Maps the ``Account`` domain value to an ``accounts`` row plus its
``account_tags`` links. Callers load, modify and save inside one
``transaction()``. ``save`` writes only what changed since this
repository loaded the account: changed columns are updated and tag links
are inserted or deleted one by one, so a concurrent writer that touched
other columns or other tags keeps its changes. Loading with
``for_update=True`` also locks the row on backends that support it.
"""

import logging
from dataclasses import replace
from typing import Iterable
from uuid import UUID

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from studygroup_service.domain.exceptions import TagNotFound
from studygroup_service.domain.models import Account, Tag
from studygroup_service.infrastructure.database.base_model import utcnow
from studygroup_service.infrastructure.database.models import AccountRecord, AccountTagLink, TagRecord
from studygroup_service.infrastructure.database.repositories.base import BaseRepository
from studygroup_service.interfaces import IAccountRepository

logger = logging.getLogger(__name__)


class AccountRepository(BaseRepository[AccountRecord], IAccountRepository):
    """
    Repository for accounts keyed by nickname.

    Example:
        >>> repo = AccountRepository(session)
        >>> async with repo.transaction():
        ...     account = await repo.find_by_nickname("jordan", for_update=True)
        ...     account.bio = "hello"
        ...     await repo.save(account)
    """

    def __init__(self, session: AsyncSession, enable_query_logging: bool = False):
        super().__init__(AccountRecord, session, enable_query_logging)
        # Last state read or written per nickname; save() diffs against it
        self._loaded: dict[str, Account] = {}

    def _remember(self, account: Account) -> None:
        self._loaded[account.nickname] = replace(account, tags=set(account.tags))

    async def _get_record(self, nickname: str, for_update: bool = False) -> AccountRecord | None:
        query = (
            select(AccountRecord)
            .where(AccountRecord.nickname == nickname)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()

        self._log_query(query, {"nickname": nickname, "for_update": for_update})
        result = await self.session.execute(query)
        return result.scalars().first()

    async def _load_tag_titles(self, account_id: UUID) -> list[str]:
        query = (
            select(TagRecord.title)
            .join(AccountTagLink, AccountTagLink.tag_id == TagRecord.id)
            .where(AccountTagLink.account_id == account_id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def _resolve_tag_ids(self, tags: Iterable[Tag]) -> dict[str, UUID]:
        titles = {tag.title for tag in tags}
        if not titles:
            return {}

        result = await self.session.execute(
            select(TagRecord.id, TagRecord.title).where(TagRecord.title.in_(sorted(titles)))
        )
        tag_ids = {title: tag_id for tag_id, title in result.all()}

        missing = titles - set(tag_ids)
        if missing:
            raise TagNotFound(details={"titles": sorted(missing)})
        return tag_ids

    async def find_by_nickname(self, nickname: str, for_update: bool = False) -> Account | None:
        """
        Get an account with its tag set.

        Args:
            nickname: Account nickname
            for_update: Lock the account row until the transaction ends

        Returns:
            Account or None if no account has this nickname
        """
        record = await self._get_record(nickname, for_update=for_update)
        if record is None:
            return None

        titles = await self._load_tag_titles(record.id)
        account = Account(
            nickname=record.nickname,
            password=record.password,
            bio=record.bio,
            tags={Tag(title) for title in titles},
        )
        self._remember(account)
        return account

    async def save(self, account: Account) -> None:
        """
        Insert the account, or write its changes since it was loaded.

        An account this repository never loaded is written in full and its
        tag links are replaced.

        Raises:
            TagNotFound: If the account references a title the tag store lacks
        """
        record = await self._get_record(account.nickname)
        if record is None:
            record = await self.create(
                AccountRecord(
                    nickname=account.nickname,
                    password=account.password,
                    bio=account.bio,
                )
            )
            logger.info("Account created", extra={"account_id": str(record.id)})
            await self._link_tags(record.id, account.tags)
            self._remember(account)
            return

        loaded = self._loaded.get(account.nickname)
        if loaded is None:
            await self._replace(record, account)
            self._remember(account)
            return

        changed = False
        if account.password != loaded.password:
            record.password = account.password
            changed = True
        if account.bio != loaded.bio:
            record.bio = account.bio
            changed = True
        if changed:
            record.updated_at = utcnow()
            await self.session.flush()

        await self._link_tags(record.id, account.tags - loaded.tags)
        await self._unlink_tags(record.id, loaded.tags - account.tags)
        self._remember(account)

    async def _replace(self, record: AccountRecord, account: Account) -> None:
        record.password = account.password
        record.bio = account.bio
        record.updated_at = utcnow()
        await self.session.flush()

        tag_ids = await self._resolve_tag_ids(account.tags)
        wanted = set(tag_ids.values())
        result = await self.session.execute(
            select(AccountTagLink.tag_id).where(AccountTagLink.account_id == record.id)
        )
        current = set(result.scalars().all())

        stale = current - wanted
        if stale:
            await self.session.execute(
                delete(AccountTagLink).where(
                    AccountTagLink.account_id == record.id,
                    AccountTagLink.tag_id.in_(list(stale)),
                )
            )
        for tag_id in wanted - current:
            await self._insert_link(record.id, tag_id)

    async def _link_tags(self, account_id: UUID, tags: Iterable[Tag]) -> None:
        tag_ids = await self._resolve_tag_ids(tags)
        for tag_id in tag_ids.values():
            await self._insert_link(account_id, tag_id)

    async def _unlink_tags(self, account_id: UUID, tags: Iterable[Tag]) -> None:
        titles = sorted(tag.title for tag in tags)
        if not titles:
            return

        tag_ids = select(TagRecord.id).where(TagRecord.title.in_(titles))
        await self.session.execute(
            delete(AccountTagLink).where(
                AccountTagLink.account_id == account_id,
                AccountTagLink.tag_id.in_(tag_ids),
            )
        )

    async def _insert_link(self, account_id: UUID, tag_id: UUID) -> None:
        await self.insert_ignore(
            {"account_id": account_id, "tag_id": tag_id},
            conflict_columns=["account_id", "tag_id"],
            model=AccountTagLink,
        )
