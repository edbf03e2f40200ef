# tests/unit/test_settings_service.py
"""Unit tests for SettingsService against in-memory stores."""

import pytest

from studygroup_service.auth.password import PasswordHasher
from studygroup_service.domain.exceptions import AccountNotFound, ValidationError
from studygroup_service.domain.models import Account, Tag
from studygroup_service.services.settings_service import SettingsService
from tests.unit.fakes import FakeAccountRepository, FakeDatabase, FakeTagRepository


@pytest.fixture
def database() -> FakeDatabase:
    database = FakeDatabase()
    database.accounts["jordan"] = Account(nickname="jordan", password="old-hash")
    return database


@pytest.fixture
def accounts(database) -> FakeAccountRepository:
    return FakeAccountRepository(database)


@pytest.fixture
def service(database, accounts) -> SettingsService:
    return SettingsService(accounts, FakeTagRepository(database), PasswordHasher(rounds=4))


@pytest.mark.unit
class TestUpdateProfile:

    async def test_updates_bio(self, service, database):
        result = await service.update_profile("jordan", "I like graphs")

        assert result.message == "Profile updated."
        assert database.accounts["jordan"].bio == "I like graphs"

    async def test_none_clears_bio(self, service, database):
        database.accounts["jordan"].bio = "old"

        await service.update_profile("jordan", None)

        assert database.accounts["jordan"].bio is None

    async def test_too_long_bio_is_rejected_without_touching_store(self, service, database, accounts):
        with pytest.raises(ValidationError) as exc_info:
            await service.update_profile("jordan", "x" * 36)

        assert exc_info.value.field == "bio"
        assert exc_info.value.reason == "length"
        assert database.accounts["jordan"].bio is None
        assert accounts.saves == 0
        assert database.commits == 0

    async def test_same_bio_twice_is_idempotent(self, service, database):
        await service.update_profile("jordan", "same")
        await service.update_profile("jordan", "same")

        assert database.accounts["jordan"].bio == "same"

    async def test_loads_account_for_update(self, service, accounts):
        await service.update_profile("jordan", "locked")

        assert accounts.locked == ["jordan"]

    async def test_unknown_account(self, service, database):
        with pytest.raises(AccountNotFound):
            await service.update_profile("nobody", "hello")

        assert database.rollbacks == 1


@pytest.mark.unit
class TestTags:

    async def test_add_creates_and_links_tag(self, service, database):
        result = await service.add_tag("jordan", "newTag")

        assert result.message == "Tag added."
        assert "newTag" in database.tags
        assert Tag("newTag") in database.accounts["jordan"].tags

    async def test_add_is_idempotent(self, service, database, accounts):
        await service.add_tag("jordan", "newTag")
        await service.add_tag("jordan", "newTag")

        assert database.accounts["jordan"].tags == {Tag("newTag")}
        assert accounts.saves == 1

    async def test_add_reuses_existing_tag(self, service, database):
        database.tags.add("graphs")

        await service.add_tag("jordan", "graphs")

        assert database.tags == {"graphs"}
        assert database.accounts["jordan"].tags == {Tag("graphs")}

    async def test_titles_are_case_sensitive(self, service, database):
        await service.add_tag("jordan", "Graphs")
        await service.add_tag("jordan", "graphs")

        assert database.tags == {"Graphs", "graphs"}

    async def test_remove_detaches_tag_but_keeps_it(self, service, database):
        await service.add_tag("jordan", "newTag")

        result = await service.remove_tag("jordan", "newTag")

        assert result.message == "Tag removed."
        assert database.accounts["jordan"].tags == set()
        assert "newTag" in database.tags

    async def test_remove_unknown_tag_is_noop(self, service, database, accounts):
        result = await service.remove_tag("jordan", "neverExisted")

        assert result.message == "Tag removed."
        assert accounts.saves == 0
        assert "neverExisted" not in database.tags

    async def test_remove_tag_not_on_account_is_noop(self, service, database, accounts):
        database.tags.add("graphs")

        await service.remove_tag("jordan", "graphs")

        assert accounts.saves == 0

    async def test_tag_settings_lists_account_tags_and_whitelist(self, service, database):
        database.tags.update({"algebra", "graphs"})
        await service.add_tag("jordan", "graphs")

        tag_settings = await service.get_tag_settings("jordan")

        assert tag_settings.tags == ["graphs"]
        assert tag_settings.whitelist == ["algebra", "graphs"]


@pytest.mark.unit
class TestUpdatePassword:

    async def test_stores_matching_hash(self, service, database):
        result = await service.update_password("jordan", "new-secret", "new-secret")

        stored = database.accounts["jordan"].password
        assert result.message == "Password updated."
        assert stored != "new-secret"
        assert service.password_hasher.matches("new-secret", stored)

    async def test_mismatch_keeps_old_credential(self, service, database, accounts):
        with pytest.raises(ValidationError) as exc_info:
            await service.update_password("jordan", "new-secret", "new-secreT")

        assert exc_info.value.field == "newPasswordConfirm"
        assert exc_info.value.reason == "mismatch"
        assert database.accounts["jordan"].password == "old-hash"
        assert accounts.saves == 0


@pytest.mark.unit
async def test_get_profile(service):
    account = await service.get_profile("jordan")

    assert account.nickname == "jordan"
    assert account.bio is None


@pytest.mark.unit
async def test_get_profile_unknown_account(service):
    with pytest.raises(AccountNotFound):
        await service.get_profile("nobody")
