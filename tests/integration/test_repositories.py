# tests/integration/test_repositories.py
"""Integration tests for the account and tag repositories on SQLite."""

import pytest
from sqlalchemy import func, select

from studygroup_service.domain.exceptions import TagNotFound
from studygroup_service.domain.models import Account, Tag
from studygroup_service.infrastructure.database.models import AccountTagLink, TagRecord
from studygroup_service.infrastructure.database.repositories import AccountRepository, TagRepository
from tests.factories import AccountFactory


async def _count(session, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


@pytest.mark.integration
class TestAccountRepository:

    async def test_save_and_find(self, account_repository, db_session):
        await account_repository.save(Account(nickname="sam", password="hash", bio="hi"))
        await db_session.commit()

        found = await account_repository.find_by_nickname("sam")

        assert found == Account(nickname="sam", password="hash", bio="hi", tags=set())

    async def test_find_unknown_returns_none(self, account_repository):
        assert await account_repository.find_by_nickname("nobody") is None

    async def test_find_for_update(self, account_repository, jordan):
        found = await account_repository.find_by_nickname("jordan", for_update=True)

        assert found.nickname == "jordan"

    async def test_save_updates_existing_record(self, account_repository, db_session, jordan, fetch_account):
        account = await account_repository.find_by_nickname("jordan")
        account.bio = "updated"
        account.password = "new-hash"

        await account_repository.save(account)
        await db_session.commit()

        stored = await fetch_account("jordan")
        assert stored.bio == "updated"
        assert stored.password == "new-hash"

    async def test_save_replaces_tag_links(self, account_repository, tag_repository, db_session):
        account = await AccountFactory.create_async(
            session=db_session,
            tags={Tag("algebra"), Tag("graphs")},
        )

        account.tags = {Tag("graphs")}
        await account_repository.save(account)
        await db_session.commit()

        stored = await account_repository.find_by_nickname(account.nickname)
        assert stored.tags == {Tag("graphs")}
        assert await _count(db_session, AccountTagLink) == 1
        # Unlinked tags stay in the store
        assert await tag_repository.find_all_titles() == ["algebra", "graphs"]

    async def test_save_with_unknown_tag_raises(self, account_repository, jordan):
        account = await account_repository.find_by_nickname("jordan")
        account.tags.add(Tag("missing"))

        with pytest.raises(TagNotFound) as exc_info:
            await account_repository.save(account)

        assert exc_info.value.details == {"titles": ["missing"]}

    async def test_save_keeps_changes_made_since_load(self, session_factory, db_session, jordan, fetch_account):
        tags = TagRepository(db_session)
        await tags.save(Tag("alpha"))
        await tags.save(Tag("beta"))
        await db_session.commit()

        async with session_factory() as first, session_factory() as second:
            stale_repository = AccountRepository(first)
            stale = await stale_repository.find_by_nickname("jordan")

            other = AccountRepository(second)
            fresh = await other.find_by_nickname("jordan")
            fresh.tags.add(Tag("beta"))
            fresh.password = "other-hash"
            await other.save(fresh)
            await second.commit()

            stale.tags.add(Tag("alpha"))
            stale.bio = "stale writer"
            await stale_repository.save(stale)
            await first.commit()

        stored = await fetch_account("jordan")
        assert stored.tags == {Tag("alpha"), Tag("beta")}
        assert stored.password == "other-hash"
        assert stored.bio == "stale writer"

    async def test_transaction_rolls_back_on_error(self, account_repository, jordan, fetch_account):
        with pytest.raises(RuntimeError):
            async with account_repository.transaction():
                account = await account_repository.find_by_nickname("jordan", for_update=True)
                account.bio = "never stored"
                await account_repository.save(account)
                raise RuntimeError("boom")

        stored = await fetch_account("jordan")
        assert stored.bio is None


@pytest.mark.integration
class TestTagRepository:

    async def test_save_creates_tag(self, tag_repository, db_session):
        tag = await tag_repository.save(Tag("newTag"))
        await db_session.commit()

        assert tag == Tag("newTag")
        assert await tag_repository.find_by_title("newTag") == Tag("newTag")

    async def test_save_existing_title_keeps_single_row(self, tag_repository, db_session):
        await tag_repository.save(Tag("newTag"))
        await db_session.commit()

        again = await tag_repository.save(Tag("newTag"))
        await db_session.commit()

        assert again == Tag("newTag")
        assert await _count(db_session, TagRecord) == 1

    async def test_save_from_two_sessions_keeps_single_row(self, session_factory, db_session):
        async with session_factory() as first, session_factory() as second:
            await TagRepository(first).save(Tag("shared"))
            await first.commit()
            await TagRepository(second).save(Tag("shared"))
            await second.commit()

        assert await _count(db_session, TagRecord) == 1

    async def test_insert_ignore_reports_conflict(self, tag_repository, db_session):
        assert await tag_repository.insert_ignore({"title": "x"}, conflict_columns=["title"]) is True
        assert await tag_repository.insert_ignore({"title": "x"}, conflict_columns=["title"]) is False
        await db_session.commit()

        assert await _count(db_session, TagRecord) == 1

    async def test_titles_are_case_sensitive(self, tag_repository, db_session):
        await tag_repository.save(Tag("Graphs"))
        await tag_repository.save(Tag("graphs"))
        await db_session.commit()

        assert await tag_repository.find_all_titles() == ["Graphs", "graphs"]

    async def test_find_unknown_title(self, tag_repository):
        assert await tag_repository.find_by_title("nope") is None

    async def test_find_all_titles_sorted(self, tag_repository, db_session):
        for title in ("physics", "algebra", "graphs"):
            await tag_repository.save(Tag(title))
        await db_session.commit()

        assert await tag_repository.find_all_titles() == ["algebra", "graphs", "physics"]
