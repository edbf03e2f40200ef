# tests/conftest.py
"""
Main pytest configuration and shared fixtures for all tests.

This module provides:
- Async test support (pytest-asyncio auto mode, see pyproject.toml)
- Test settings (fast bcrypt, quiet logging, no external database)
- Per-test SQLite database with all tables created
- Repository and service fixtures bound to the test session
- FastAPI app and async HTTP client with the database dependency overridden
- A seeded "jordan" account built with Factory Boy
"""

import os

# Must be set before the application reads its settings
os.environ["PASSWORD_BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "40"
os.environ["ENVIRONMENT"] = "local"
os.environ.pop("DATABASE_URL", None)

from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from studygroup_service.config.settings import Settings, get_settings

get_settings.cache_clear()

from studygroup_service.api.app import create_app
from studygroup_service.api.dependencies import get_db_session
from studygroup_service.auth.password import PasswordHasher
from studygroup_service.domain.models import Account
from studygroup_service.infrastructure.database.connection import DatabaseManager
from studygroup_service.infrastructure.database.models import AccountRecord, AccountTagLink, TagRecord  # noqa: F401
from studygroup_service.infrastructure.database.repositories import AccountRepository, TagRepository
from studygroup_service.services import SettingsService
from tests.factories import AccountFactory

JORDAN_PASSWORD = "jordan-old-password"


# ============================================================================
# Settings and Configuration
# ============================================================================

@pytest.fixture
def test_settings() -> Settings:
    """Settings as the application sees them under test."""
    return get_settings()


@pytest.fixture
def password_hasher(test_settings: Settings) -> PasswordHasher:
    return PasswordHasher(rounds=test_settings.password_bcrypt_rounds)


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
async def test_engine(tmp_path):
    """
    Engine over a fresh SQLite file with every table created.

    A file (not ``:memory:``) so that separate connections see the same
    data; NullPool so no connection outlives the test.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """
    Session for seeding data and driving repositories directly.

    Repositories commit through ``transaction()``, so no outer
    transaction wraps the test.
    """
    async with session_factory() as session:
        yield session


@pytest.fixture
async def db_manager(test_engine) -> AsyncGenerator[DatabaseManager, None]:
    """DatabaseManager wired to the test engine."""
    manager = DatabaseManager()
    manager._engine = test_engine
    manager._session_factory = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    yield manager

    # The engine itself is disposed by test_engine
    manager._engine = None
    manager._session_factory = None


@pytest.fixture
def fetch_account(session_factory):
    """
    Read an account through a fresh session.

    Keeps verification reads from holding a SQLite read lock on the
    session under test.
    """
    async def _fetch(nickname: str) -> Account | None:
        async with session_factory() as session:
            return await AccountRepository(session).find_by_nickname(nickname)

    return _fetch


# ============================================================================
# Repositories and Services
# ============================================================================

@pytest.fixture
def account_repository(db_session: AsyncSession) -> AccountRepository:
    return AccountRepository(db_session)


@pytest.fixture
def tag_repository(db_session: AsyncSession) -> TagRepository:
    return TagRepository(db_session)


@pytest.fixture
def settings_service(
    account_repository: AccountRepository,
    tag_repository: TagRepository,
    password_hasher: PasswordHasher,
) -> SettingsService:
    return SettingsService(account_repository, tag_repository, password_hasher)


@pytest.fixture
async def jordan(db_session: AsyncSession) -> Account:
    """The account "jordan" with no bio and no tags."""
    return await AccountFactory.create_async(
        session=db_session,
        nickname="jordan",
        bio=None,
        raw_password=JORDAN_PASSWORD,
    )


# ============================================================================
# FastAPI Application and Client
# ============================================================================

@pytest.fixture
def app(session_factory) -> FastAPI:
    """
    Fresh application whose request sessions come from the test engine.

    The lifespan does not run under ASGITransport, so the global
    DatabaseManager stays disconnected.
    """
    application = create_app()

    async def _get_test_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db_session] = _get_test_db_session
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client for testing FastAPI endpoints.

    Usage:
        async def test_endpoint(async_client):
            response = await async_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def jordan_headers(jordan: Account) -> dict:
    """Identity header for the seeded account."""
    return {"X-Account-Nickname": jordan.nickname}
