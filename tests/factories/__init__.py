# tests/factories/__init__.py
"""
Factory Boy factories for creating test data.

This package contains factories for generating domain values
for testing purposes using Factory Boy.
"""

from tests.factories.base import AsyncRepositoryFactory, BaseFactory
from tests.factories.account import AccountFactory

__all__ = ["AccountFactory", "AsyncRepositoryFactory", "BaseFactory"]
