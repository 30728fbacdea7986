"""Настройка подключения к базе данных."""

import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from catalog_service.core.config import settings


def create_engine(url: str | None = None) -> AsyncEngine:
    """
    Создает асинхронный "движок" SQLAlchemy.

    Вызывается один раз при старте процесса.

    Args:
        url: Строка подключения. По умолчанию берется из настроек.

    Returns:
        Асинхронный движок.
    """
    engine = create_async_engine(
        url or settings.database_url,
        echo=False,
        pool_pre_ping=True,  # Проверяет "живо" ли соединение перед использованием
    )
    logging.info("Database engine created for %s", engine.url.render_as_string())
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Создает фабрику асинхронных сессий для переданного движка.
    """
    return async_sessionmaker(
        engine,
        autoflush=False,
        expire_on_commit=False,
        class_=AsyncSession,
    )


async def dispose_engine(engine: AsyncEngine) -> None:
    """
    Закрывает все соединения пула при остановке процесса.
    """
    await engine.dispose()
    logging.info("Database engine disposed")
