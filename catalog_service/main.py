"""Главный файл приложения. Точка входа."""

import asyncio
import contextlib
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import Body, FastAPI, Request
from fastapi.responses import JSONResponse
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog_service.core.config import settings
from catalog_service.core.logging import setup_logging
from catalog_service.db.session import (
    create_engine,
    create_session_factory,
    dispose_engine,
)
from catalog_service.handlers import product_commands
from catalog_service.messaging.dispatcher import CommandDispatcher
from catalog_service.messaging.listener import RedisCommandListener
from catalog_service.middlewares.db_session import DbSessionMiddleware


def build_dispatcher(
    session_pool: async_sessionmaker[AsyncSession],
) -> CommandDispatcher:
    """
    Собирает диспетчер с middleware сессий и всеми обработчиками.
    """
    dp = CommandDispatcher()
    dp.middleware(DbSessionMiddleware(session_pool=session_pool))
    dp.include_router(product_commands.router)
    return dp


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Контекстный менеджер для управления жизненным циклом приложения.
    """
    setup_logging(settings.LOG_LEVEL)
    logging.info("Starting catalog service")

    engine = create_engine()
    dp = build_dispatcher(create_session_factory(engine))
    redis_client = Redis(host=settings.REDIS_HOST, port=settings.REDIS_PORT)
    listener = RedisCommandListener(
        redis=redis_client,
        dispatcher=dp,
        queue=settings.REQUEST_QUEUE,
        reply_prefix=settings.REPLY_PREFIX,
        reply_ttl=settings.REPLY_TTL_SECONDS,
    )

    # Сохраняем экземпляры в app.state для доступа в обработчиках
    app.state.engine = engine
    app.state.dp = dp
    app.state.redis = redis_client
    listener_task = asyncio.create_task(listener.run())
    logging.info("Registered commands: %s", ", ".join(dp.commands))

    yield

    logging.info("Shutting down catalog service")
    listener.stop()
    listener_task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await listener_task
    await redis_client.aclose()
    await dispose_engine(engine)


# --- Приложение FastAPI ---
app = FastAPI(title="Product catalog service", lifespan=lifespan)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/rpc/{cmd}")
async def rpc_handler(
    request: Request, cmd: str, payload: Any = Body(default=None)
) -> JSONResponse:
    """
    HTTP-мост к тем же командам, что принимаются из очереди.
    """
    dp: CommandDispatcher = request.app.state.dp
    reply = await dp.process(cmd, payload)
    if not reply.ok:
        return JSONResponse(content=reply.error, status_code=reply.status)
    return JSONResponse(content=reply.response, status_code=reply.status)


# --- Точка входа для локального запуска ---
if __name__ == "__main__":
    uvicorn.run(
        "catalog_service.main:app",
        host="0.0.0.0",  # noqa: B104
        port=settings.PORT,
    )
