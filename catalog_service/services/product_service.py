"""Сервисный слой для управления каталогом товаров."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from catalog_service.common.pagination import (
    PageMeta,
    PaginationParams,
    resolve_page_meta,
)
from catalog_service.db.models import Product
from catalog_service.repositories.product_store import ProductStore
from catalog_service.services.exceptions import (
    ProductNotFoundError,
    ProductsUnavailableError,
)

# Поля, которые клиент может менять через update
CLIENT_MUTABLE_FIELDS = ("name", "price")


class ProductService:
    """
    Бизнес-правила каталога: доступность, пагинация, пакетная проверка.

    Хранилище передается в конструктор, сервис не хранит состояние
    между вызовами.
    """

    def __init__(self, store: ProductStore) -> None:
        self.store = store

    async def create(self, name: str, price: float) -> Product:
        """
        Создает новый доступный товар.

        Args:
            name: Название товара.
            price: Цена товара.

        Returns:
            Созданный объект товара с присвоенным ID.
        """
        product = await self.store.insert(name=name, price=price)
        logging.info("Product %s created: %r", product.id, product.name)
        return product

    async def find_all(
        self, params: PaginationParams
    ) -> tuple[Sequence[Product], PageMeta]:
        """
        Возвращает страницу доступных товаров и ее метаданные.

        Подсчет и выборка выполняются отдельными запросами, поэтому при
        конкурентных изменениях total может не совпасть с окном.

        Args:
            params: Номер и размер страницы.

        Returns:
            Пара (товары страницы, метаданные).
        """
        total = await self.store.count(available=True)
        meta = resolve_page_meta(params, total)
        if params.skip >= total:
            return [], meta
        data = await self.store.scan(
            offset=params.skip, limit=params.limit, available=True
        )
        return data, meta

    async def find_one(self, product_id: int) -> Product:
        """
        Находит доступный товар по ID.

        Raises:
            ProductNotFoundError: Если товара нет или он снят с продажи.
        """
        product = await self.store.get(product_id, available=True)
        if not product:
            logging.info("Product %s not found", product_id)
            raise ProductNotFoundError()
        return product

    async def update(self, product_id: int, fields: Mapping[str, Any]) -> Product:
        """
        Обновляет название и/или цену доступного товара.

        Из fields берутся только name и price, остальные ключи
        (в том числе available) игнорируются.

        Raises:
            ProductNotFoundError: Если товара нет или он снят с продажи.
        """
        await self.find_one(product_id)
        changes = {
            key: value for key, value in fields.items() if key in CLIENT_MUTABLE_FIELDS
        }
        product = await self.store.update_fields(product_id, changes)
        logging.info("Product %s updated: %s", product_id, sorted(changes))
        return product

    async def remove(self, product_id: int) -> Product:
        """
        Снимает товар с продажи (мягкое удаление).

        Строка остается в базе, но больше не видна при чтении.

        Raises:
            ProductNotFoundError: Если товара нет или он уже снят с продажи.
        """
        await self.find_one(product_id)
        product = await self.store.update_fields(product_id, {"available": False})
        logging.info("Product %s marked as unavailable", product_id)
        return product

    async def validate_products(self, ids: Iterable[int]) -> list[Product]:
        """
        Проверяет, что все переданные ID указывают на доступные товары.

        Повторы в запросе игнорируются. Проверка по принципу
        "все или ничего".

        Args:
            ids: ID товаров, например позиции заказа.

        Returns:
            Товары в порядке первого появления их ID во входных данных.

        Raises:
            ProductsUnavailableError: Если хотя бы один ID не найден или
                товар снят с продажи.
        """
        unique_ids = list(dict.fromkeys(ids))
        products = await self.store.find_by_ids(unique_ids, available=True)
        if len(products) != len(unique_ids):
            found = {product.id for product in products}
            logging.warning(
                "Products validation failed, missing: %s",
                [product_id for product_id in unique_ids if product_id not in found],
            )
            raise ProductsUnavailableError()

        by_id = {product.id: product for product in products}
        return [by_id[product_id] for product_id in unique_ids]
