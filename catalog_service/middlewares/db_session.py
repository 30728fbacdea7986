"""Middleware, открывающий сессию базы данных на каждое сообщение."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog_service.messaging.dispatcher import BaseMiddleware, NextHandler


class DbSessionMiddleware(BaseMiddleware):
    """
    Передает обработчику отдельную сессию в аргументе session
    и закрывает ее после ответа.
    """

    def __init__(self, session_pool: async_sessionmaker[AsyncSession]) -> None:
        self.session_pool = session_pool

    async def __call__(
        self, handler: NextHandler, payload: Any, data: dict[str, Any]
    ) -> Any:
        async with self.session_pool() as session:
            data["session"] = session
            return await handler(payload, data)
