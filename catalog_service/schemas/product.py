"""Схемы входящих сообщений и ответов для товаров."""

import datetime
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    field_validator,
)
from pydantic.alias_generators import to_camel

from catalog_service.common.pagination import PageMeta

# Конечная неотрицательная цена: inf и nan не сериализуются в JSON
Price = Annotated[float, Field(ge=0, allow_inf_nan=False)]
ProductName = Annotated[str, Field(min_length=1, max_length=255)]


class ProductCreate(BaseModel):
    name: ProductName
    price: Price


class ProductUpdate(BaseModel):
    """
    Частичное обновление. Поле available сюда не входит и отбрасывается.

    Поля можно не передавать, но явный null запрещен.
    """

    id: PositiveInt
    name: ProductName | None = None
    price: Price | None = None

    @field_validator("name", "price", mode="before")
    @classmethod
    def forbid_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("must not be null")
        return value

    def changes(self) -> dict[str, Any]:
        """Только явно переданные изменяемые поля."""
        return self.model_dump(include={"name", "price"}, exclude_unset=True)


class ProductId(BaseModel):
    id: PositiveInt


class ProductPublic(BaseModel):
    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )

    id: int
    name: str
    price: float
    available: bool
    created_at: datetime.datetime
    updated_at: datetime.datetime


class ProductPage(BaseModel):
    data: list[ProductPublic]
    meta: PageMeta
