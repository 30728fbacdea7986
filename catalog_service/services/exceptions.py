"""Исключения сервисного слоя.

Каждое исключение несет HTTP-подобный статус, по которому транспорт
формирует ответ вызывающему сервису.
"""

from http import HTTPStatus


class ProductServiceError(Exception):
    """Базовая ошибка, которую можно вернуть вызывающему сервису."""

    status_code: HTTPStatus = HTTPStatus.BAD_REQUEST
    default_message = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, int | str]:
        return {"status": int(self.status_code), "message": self.message}


class ProductNotFoundError(ProductServiceError):
    """Товар не существует или уже снят с продажи."""

    status_code = HTTPStatus.NOT_FOUND
    default_message = "Product not found"


class ProductsUnavailableError(ProductServiceError):
    """Хотя бы один товар из пакета не найден или недоступен."""

    status_code = HTTPStatus.BAD_REQUEST
    default_message = "One or more products are not available"


class InvalidPayloadError(ProductServiceError):
    """Тело сообщения не прошло валидацию."""

    status_code = HTTPStatus.BAD_REQUEST
    default_message = "Invalid payload"


class UnknownCommandError(ProductServiceError):
    """Для команды не зарегистрирован обработчик."""

    status_code = HTTPStatus.NOT_FOUND
    default_message = "Unknown command"
