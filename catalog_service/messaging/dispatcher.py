"""Маршрутизация именованных команд к обработчикам."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from catalog_service.services.exceptions import (
    InvalidPayloadError,
    ProductServiceError,
    UnknownCommandError,
)

Handler = Callable[..., Awaitable[Any]]
NextHandler = Callable[[Any, dict[str, Any]], Awaitable[Any]]
T = TypeVar("T")


class BaseMiddleware:
    """
    Промежуточный слой вокруг обработчика команды.

    Получает следующий обработчик, тело сообщения и словарь данных,
    которые будут переданы обработчику как именованные аргументы.
    """

    async def __call__(
        self, handler: NextHandler, payload: Any, data: dict[str, Any]
    ) -> Any:
        return await handler(payload, data)


class CommandRouter:
    """Набор обработчиков, зарегистрированных по имени команды."""

    def __init__(self) -> None:
        self.handlers: dict[str, Handler] = {}

    def command(self, name: str) -> Callable[[Handler], Handler]:
        def decorator(handler: Handler) -> Handler:
            if name in self.handlers:
                raise ValueError(f"Command {name!r} is already registered")
            self.handlers[name] = handler
            return handler

        return decorator


@dataclass
class CommandReply:
    """Результат обработки команды, готовый к сериализации в JSON."""

    status: int
    response: Any = None
    error: dict[str, Any] | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CommandDispatcher:
    """
    Диспетчер команд: ищет обработчик, прогоняет его через middleware
    и превращает ошибки в ответ для вызывающего сервиса.
    """

    def __init__(self) -> None:
        self.handlers: dict[str, Handler] = {}
        self.middlewares: list[BaseMiddleware] = []

    def include_router(self, router: CommandRouter) -> None:
        for name, handler in router.handlers.items():
            if name in self.handlers:
                raise ValueError(f"Command {name!r} is already registered")
            self.handlers[name] = handler

    def middleware(self, middleware: BaseMiddleware) -> None:
        self.middlewares.append(middleware)

    @property
    def commands(self) -> list[str]:
        return sorted(self.handlers)

    async def feed_command(self, cmd: str, payload: Any, **data: Any) -> Any:
        """
        Выполняет обработчик команды.

        Raises:
            UnknownCommandError: Если обработчик не зарегистрирован.
        """
        handler = self.handlers.get(cmd)
        if handler is None:
            raise UnknownCommandError(f"Unknown command: {cmd}")

        async def call_handler(payload: Any, data: dict[str, Any]) -> Any:
            return await handler(payload, **data)

        wrapped: NextHandler = call_handler
        for middleware in reversed(self.middlewares):
            wrapped = _bind(middleware, wrapped)
        return await wrapped(payload, dict(data))

    async def process(self, cmd: str, payload: Any, **data: Any) -> CommandReply:
        """
        Выполняет команду и никогда не выбрасывает исключений наружу.

        Ошибки сервиса возвращаются с их статусом, остальные ошибки
        (например, недоступность базы) логируются и отдаются как 500.
        """
        try:
            result = await self.feed_command(cmd, payload, **data)
        except ProductServiceError as e:
            return CommandReply(status=int(e.status_code), error=e.to_dict())
        except Exception:
            logging.exception("Error while processing command %r", cmd)
            status = int(HTTPStatus.INTERNAL_SERVER_ERROR)
            return CommandReply(
                status=status,
                error={"status": status, "message": "Internal server error"},
            )
        return CommandReply(
            status=int(HTTPStatus.OK),
            response=to_jsonable_python(result, by_alias=True),
        )


def _bind(middleware: BaseMiddleware, handler: NextHandler) -> NextHandler:
    async def wrapper(payload: Any, data: dict[str, Any]) -> Any:
        return await middleware(handler, payload, data)

    return wrapper


def parse_payload(schema: type[T] | TypeAdapter[T], payload: Any) -> T:
    """
    Валидирует тело сообщения по схеме.

    Raises:
        InvalidPayloadError: Со списком ошибок по полям.
    """
    adapter = schema if isinstance(schema, TypeAdapter) else TypeAdapter(schema)
    try:
        return adapter.validate_python(payload)
    except ValidationError as e:
        details = "; ".join(
            f"{_format_loc(error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise InvalidPayloadError(details) from e


def _format_loc(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc) or "payload"
