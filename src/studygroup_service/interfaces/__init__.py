# src/studygroup_service/interfaces/__init__.py
from .repository import IAccountRepository, ITagRepository

__all__ = [
    "IAccountRepository",
    "ITagRepository",
]
