"""Хранилище товаров."""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from catalog_service.db.models import Product, utc_now
from catalog_service.services.exceptions import ProductNotFoundError

UPDATABLE_FIELDS = frozenset({"name", "price", "available"})

# Диапазон колонки Product.id (INTEGER); ID вне него в базе быть не может
MAX_PRODUCT_ID = 2**31 - 1


def is_storable_id(product_id: int) -> bool:
    return 1 <= product_id <= MAX_PRODUCT_ID


class ProductStore(Protocol):
    """Набор операций, который должно поддерживать любое хранилище товаров."""

    async def count(self, available: bool = True) -> int: ...

    async def scan(
        self, offset: int, limit: int, available: bool = True
    ) -> Sequence[Product]: ...

    async def get(self, product_id: int, available: bool = True) -> Product | None: ...

    async def insert(self, name: str, price: float) -> Product: ...

    async def update_fields(
        self, product_id: int, fields: Mapping[str, Any]
    ) -> Product: ...

    async def find_by_ids(
        self, ids: Iterable[int], available: bool = True
    ) -> Sequence[Product]: ...


class SqlProductStore:
    """
    Хранилище товаров поверх асинхронной сессии SQLAlchemy.

    Каждая операция записи фиксирует транзакцию сразу.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def count(self, available: bool = True) -> int:
        statement = (
            select(func.count())
            .select_from(Product)
            .where(Product.available == available)
        )
        total = await self.session.scalar(statement)
        return total or 0

    async def scan(
        self, offset: int, limit: int, available: bool = True
    ) -> Sequence[Product]:
        """
        Возвращает окно записей в порядке id.

        Args:
            offset: Сколько записей пропустить.
            limit: Максимальный размер окна.
            available: Фильтр по признаку доступности.
        """
        statement = (
            select(Product)
            .where(Product.available == available)
            .order_by(Product.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(statement)
        return result.scalars().all()

    async def get(self, product_id: int, available: bool = True) -> Product | None:
        if not is_storable_id(product_id):
            return None
        statement = select(Product).where(
            Product.id == product_id, Product.available == available
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def insert(self, name: str, price: float) -> Product:
        db_product = Product(name=name, price=price)
        self.session.add(db_product)
        await self.session.commit()
        await self.session.refresh(db_product)
        return db_product

    async def update_fields(
        self, product_id: int, fields: Mapping[str, Any]
    ) -> Product:
        """
        Частично обновляет товар независимо от его доступности.

        Args:
            product_id: ID товара.
            fields: Новые значения name, price и/или available.

        Returns:
            Обновленный объект Product.

        Raises:
            ProductNotFoundError: Если строки с таким ID нет.
            ValueError: Если передано поле, которое нельзя менять.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")

        if not is_storable_id(product_id):
            raise ProductNotFoundError()
        db_product = await self.session.get(Product, product_id)
        if not db_product:
            raise ProductNotFoundError()

        for key, value in fields.items():
            setattr(db_product, key, value)
        db_product.updated_at = utc_now()
        self.session.add(db_product)
        await self.session.commit()
        await self.session.refresh(db_product)
        return db_product

    async def find_by_ids(
        self, ids: Iterable[int], available: bool = True
    ) -> Sequence[Product]:
        id_list = [product_id for product_id in ids if is_storable_id(product_id)]
        if not id_list:
            return []
        statement = (
            select(Product)
            .where(Product.id.in_(id_list), Product.available == available)  # type: ignore[union-attr]
            .order_by(Product.id)
        )
        result = await self.session.execute(statement)
        return result.scalars().all()
