# src/studygroup_service/domain/models.py
"""
Domain entities for account settings.

These are plain values. Persistence lives in
``infrastructure.database`` where the repositories map them to and from
the SQLModel tables.
"""
from __future__ import annotations
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Tag:
    """A shared label identified by its (case-sensitive) title."""
    title: str


@dataclass
class Account:
    """
    A registered user as seen by the settings feature.

    ``password`` always holds a hash. ``tags`` is the owned, duplicate-free
    set of tag references; the account store persists it as join rows.
    """
    nickname: str
    password: str
    bio: str | None = None
    tags: set[Tag] = field(default_factory=set)

    def tag_titles(self) -> list[str]:
        return sorted(tag.title for tag in self.tags)


@dataclass
class TagSettings:
    """The account's tags alongside every title known to the tag store."""
    tags: list[str]
    whitelist: list[str]


@dataclass
class SettingsResult:
    """Outcome of a successful settings change."""
    message: str
