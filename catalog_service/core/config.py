"""Настройки конфигурации приложения."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Загружает настройки из файла .env и переменных окружения.

    Атрибуты:
        model_config: Конфигурация для Pydantic моделей.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # База данных
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "products"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    # Полная строка подключения, перекрывает POSTGRES_*
    DATABASE_URL: str | None = None

    # Redis
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379

    # Очередь запросов и ключи ответов
    REQUEST_QUEUE: str = "catalog.requests"
    REPLY_PREFIX: str = "catalog.replies."
    REPLY_TTL_SECONDS: int = 60

    # HTTP
    PORT: int = 3001

    LOG_LEVEL: str = "INFO"

    @property
    def database_url(self) -> str:
        """
        Собирает строку подключения к PostgreSQL.

        Returns:
            Строка подключения для SQLAlchemy.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


settings = Settings()
