"""Конфигурация и фикстуры для тестов Pytest."""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from catalog_service.db.models import Product
from catalog_service.db.session import create_session_factory
from catalog_service.main import build_dispatcher
from catalog_service.messaging.dispatcher import CommandDispatcher
from catalog_service.repositories.product_store import SqlProductStore
from catalog_service.services.product_service import ProductService

# Используем асинхронный драйвер для SQLite для тестов
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Фикстура с отдельной базой в памяти для каждого теста.
    """
    async_engine = create_async_engine(
        TEST_DATABASE_URL, echo=False, poolclass=StaticPool
    )
    async with async_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield async_engine

    await async_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Фикстура, предоставляющая сессию БД для теста.
    """
    async with session_factory() as db_session:
        yield db_session


@pytest.fixture
def store(session: AsyncSession) -> SqlProductStore:
    return SqlProductStore(session)


@pytest.fixture
def service(store: SqlProductStore) -> ProductService:
    return ProductService(store)


@pytest.fixture
def dp(session_factory: async_sessionmaker[AsyncSession]) -> CommandDispatcher:
    return build_dispatcher(session_factory)


@pytest.fixture
async def catalog(service: ProductService) -> list[Product]:
    """
    Три товара: первые два доступны, третий снят с продажи.
    """
    first = await service.create("Дрель", 120.0)
    second = await service.create("Молоток", 15.5)
    third = await service.create("Пила", 40.0)
    await service.remove(third.id)  # type: ignore[arg-type]
    return [first, second, third]
