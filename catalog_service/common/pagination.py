"""Расчет параметров и метаданных пагинации."""

import math

from pydantic import BaseModel, ConfigDict, Field, PositiveInt
from pydantic.alias_generators import to_camel

# Верхняя граница размера страницы
MAX_PAGE_LIMIT = 100


class PaginationParams(BaseModel):
    """Запрос страницы: номер и размер, оба строго положительные."""

    page: PositiveInt = 1
    limit: PositiveInt = Field(default=10, le=MAX_PAGE_LIMIT)

    @property
    def skip(self) -> int:
        """Смещение первой записи страницы."""
        return (self.page - 1) * self.limit


class PageMeta(BaseModel):
    """Метаданные страницы, сопровождающие список."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int
    limit: int
    total: int
    last_page: int


def resolve_page_meta(params: PaginationParams, total: int) -> PageMeta:
    """
    Дополняет запрос страницы общим количеством записей.

    Args:
        params: Номер и размер страницы.
        total: Количество записей, подходящих под выборку.

    Returns:
        Метаданные страницы. При total == 0 last_page тоже 0.
    """
    return PageMeta(
        page=params.page,
        limit=params.limit,
        total=total,
        last_page=math.ceil(total / params.limit),
    )
