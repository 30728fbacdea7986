"""Модели базы данных проекта."""

import datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utc_now() -> datetime.datetime:
    """Текущее время в UTC."""
    return datetime.datetime.now(datetime.UTC)


class Product(SQLModel, table=True):
    """Модель товара каталога."""

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    price: float
    # Единственный признак "живости" товара, строки никогда не удаляются
    available: bool = Field(default=True, index=True)
    created_at: datetime.datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True)
    )
    updated_at: datetime.datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True)
    )
