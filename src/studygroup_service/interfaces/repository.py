# src/studygroup_service/interfaces/repository.py
from __future__ import annotations
from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager

from studygroup_service.domain.models import Account, Tag


class IAccountRepository(ABC):
    """
    Account store: account records keyed by unique nickname.

    ``save`` persists the account, tag set included, applying only the
    changes made since the account was loaded so concurrent writers to
    other fields or tags are not overwritten. Implementations also
    expose a transaction boundary that commits on success and rolls back
    on error.

    Example:
        class InMemoryAccountRepository(IAccountRepository):
            async def find_by_nickname(self, nickname, for_update=False):
                ...
    """

    @abstractmethod
    async def find_by_nickname(self, nickname: str, for_update: bool = False) -> Account | None:
        """Get account by nickname, optionally locking its row."""
        pass

    @abstractmethod
    async def save(self, account: Account) -> None:
        """Insert the account or write its changes since it was loaded."""
        pass

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Unit of work spanning every store sharing this session."""
        pass


class ITagRepository(ABC):
    """Tag store: tag records keyed by unique title."""

    @abstractmethod
    async def find_by_title(self, title: str) -> Tag | None:
        """Get tag by title."""
        pass

    @abstractmethod
    async def save(self, tag: Tag) -> Tag:
        """Create the tag unless one with the same title exists; return the stored tag."""
        pass

    @abstractmethod
    async def find_all_titles(self) -> list[str]:
        """Every stored title, sorted."""
        pass
