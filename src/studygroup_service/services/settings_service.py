"""
Business logic for account settings.

Each mutation is one read-modify-write cycle inside a single store
transaction: the account row is loaded for update, changed, and saved;
either the whole cycle commits or nothing is persisted. Input is
validated before the transaction opens, so a rejected request never
touches the store.
"""

import asyncio

from studygroup_service.auth.password import PasswordHasher
from studygroup_service.domain.exceptions import AccountNotFound, ValidationError
from studygroup_service.domain.models import Account, SettingsResult, Tag, TagSettings
from studygroup_service.domain.validation import validate_password_change, validate_profile
from studygroup_service.infrastructure.observability.logging import get_logger
from studygroup_service.interfaces import IAccountRepository, ITagRepository

logger = get_logger(__name__)

PROFILE_UPDATED = "Profile updated."
TAG_ADDED = "Tag added."
TAG_REMOVED = "Tag removed."
PASSWORD_UPDATED = "Password updated."


class SettingsService:
    """
    Profile, tag and password management for a signed-in account.

    Both stores must share one session so ``accounts.transaction()``
    covers tag writes too.

    Example:
        >>> service = SettingsService(AccountRepository(session), TagRepository(session), PasswordHasher())
        >>> result = await service.update_profile("jordan", "I like graphs")
        >>> result.message
        'Profile updated.'
    """

    def __init__(
        self,
        accounts: IAccountRepository,
        tags: ITagRepository,
        password_hasher: PasswordHasher,
    ):
        self.accounts = accounts
        self.tags = tags
        self.password_hasher = password_hasher

    async def _load_account(self, nickname: str, for_update: bool = False) -> Account:
        account = await self.accounts.find_by_nickname(nickname, for_update=for_update)
        if account is None:
            raise AccountNotFound(details={"nickname": nickname})
        return account

    async def get_profile(self, nickname: str) -> Account:
        """
        Get the account's profile.

        Raises:
            AccountNotFound: If no account has this nickname
        """
        return await self._load_account(nickname)

    async def get_tag_settings(self, nickname: str) -> TagSettings:
        """The account's tag titles plus every stored title for autocompletion."""
        account = await self._load_account(nickname)
        whitelist = await self.tags.find_all_titles()
        return TagSettings(tags=account.tag_titles(), whitelist=whitelist)

    async def update_profile(self, nickname: str, bio: str | None) -> SettingsResult:
        """
        Replace the account's bio. ``None`` clears it.

        Raises:
            ValidationError: bio longer than 35 characters (field ``bio``,
                reason ``length``); nothing is persisted
            AccountNotFound: If no account has this nickname
        """
        violation = validate_profile(bio)
        if violation is not None:
            logger.info("Profile update rejected", nickname=nickname, reason=violation.reason)
            raise ValidationError.from_violation(violation)

        async with self.accounts.transaction():
            account = await self._load_account(nickname, for_update=True)
            account.bio = bio
            await self.accounts.save(account)

        logger.info("Profile updated", nickname=nickname)
        return SettingsResult(message=PROFILE_UPDATED)

    async def add_tag(self, nickname: str, tag_title: str) -> SettingsResult:
        """
        Attach a tag, creating it first if no tag has this title.

        Idempotent: adding a tag the account already has changes nothing.
        """
        async with self.accounts.transaction():
            account = await self._load_account(nickname, for_update=True)
            tag = await self.tags.save(Tag(title=tag_title))
            if tag not in account.tags:
                account.tags.add(tag)
                await self.accounts.save(account)

        logger.info("Tag added", nickname=nickname, tag=tag_title)
        return SettingsResult(message=TAG_ADDED)

    async def remove_tag(self, nickname: str, tag_title: str) -> SettingsResult:
        """
        Detach a tag. Unknown titles and tags the account lacks are no-ops.

        The tag itself stays in the store.
        """
        async with self.accounts.transaction():
            account = await self._load_account(nickname, for_update=True)
            tag = await self.tags.find_by_title(tag_title)
            if tag is not None and tag in account.tags:
                account.tags.discard(tag)
                await self.accounts.save(account)

        logger.info("Tag removed", nickname=nickname, tag=tag_title)
        return SettingsResult(message=TAG_REMOVED)

    async def update_password(
        self,
        nickname: str,
        new_password: str,
        new_password_confirm: str,
    ) -> SettingsResult:
        """
        Replace the account's credential with a hash of ``new_password``.

        Raises:
            ValidationError: confirmation differs (field
                ``newPasswordConfirm``, reason ``mismatch``); the stored
                credential is unchanged
            AccountNotFound: If no account has this nickname
        """
        violation = validate_password_change(new_password, new_password_confirm)
        if violation is not None:
            logger.info("Password update rejected", nickname=nickname, reason=violation.reason)
            raise ValidationError.from_violation(violation)

        # Hashed in a worker thread, before the row lock is taken
        hashed = await asyncio.to_thread(self.password_hasher.hash, new_password)

        async with self.accounts.transaction():
            account = await self._load_account(nickname, for_update=True)
            account.password = hashed
            await self.accounts.save(account)

        logger.info("Password updated", nickname=nickname)
        return SettingsResult(message=PASSWORD_UPDATED)
