"""
SQLModel tables for accounts and their tag links.

The account row carries the profile and credential. Tag membership is
kept in ``account_tags``, one row per (account, tag) pair; the composite
primary key keeps the set duplicate-free.
"""

from typing import Optional
from uuid import UUID

from sqlmodel import Field, SQLModel

from studygroup_service.domain.validation import BIO_MAX_LENGTH
from studygroup_service.infrastructure.database.base_model import BaseModel


class AccountRecord(BaseModel, table=True):
    """
    Persisted account.

    Attributes:
        id: Unique identifier (UUID)
        nickname: Public identity, unique and immutable after registration
        password: Password hash (never plaintext)
        bio: Short self-introduction, at most 35 characters
        created_at: Timestamp when the account was created
        updated_at: Timestamp when the account was last modified
    """

    __tablename__ = "accounts"

    nickname: str = Field(
        nullable=False,
        unique=True,
        index=True,
        max_length=20,
        description="Account nickname (unique)",
        sa_column_kwargs={"comment": "Account nickname - unique, immutable"}
    )

    password: str = Field(
        nullable=False,
        max_length=255,
        description="Password hash",
        sa_column_kwargs={"comment": "bcrypt hash - never plaintext"}
    )

    bio: Optional[str] = Field(
        default=None,
        nullable=True,
        max_length=BIO_MAX_LENGTH,
        description="Short self-introduction",
    )

    def __repr__(self) -> str:
        """String representation of the account (never includes password)."""
        return f"<AccountRecord(id={self.id}, nickname={self.nickname!r})>"


class AccountTagLink(SQLModel, table=True):
    """Join row linking an account to one tag."""

    __tablename__ = "account_tags"

    account_id: UUID = Field(foreign_key="accounts.id", primary_key=True)
    tag_id: UUID = Field(foreign_key="tags.id", primary_key=True, index=True)
