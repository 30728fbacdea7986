"""Обработчики команд каталога товаров."""

from typing import Any

from pydantic import TypeAdapter
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_service.common.pagination import PaginationParams
from catalog_service.messaging.dispatcher import CommandRouter, parse_payload
from catalog_service.repositories.product_store import SqlProductStore
from catalog_service.schemas.product import (
    ProductCreate,
    ProductId,
    ProductPage,
    ProductPublic,
    ProductUpdate,
)
from catalog_service.services.product_service import ProductService

router = CommandRouter()

_product_ids = TypeAdapter(list[int])


def get_service(session: AsyncSession) -> ProductService:
    return ProductService(SqlProductStore(session))


@router.command("create_product")
async def create_product(payload: Any, session: AsyncSession) -> ProductPublic:
    dto = parse_payload(ProductCreate, payload)
    product = await get_service(session).create(name=dto.name, price=dto.price)
    return ProductPublic.model_validate(product)


@router.command("find_all_products")
async def find_all_products(payload: Any, session: AsyncSession) -> ProductPage:
    """
    Страница доступных товаров. Пустое тело означает первую страницу.
    """
    params = parse_payload(PaginationParams, payload or {})
    data, meta = await get_service(session).find_all(params)
    return ProductPage(
        data=[ProductPublic.model_validate(product) for product in data],
        meta=meta,
    )


@router.command("find_one_product")
async def find_one_product(payload: Any, session: AsyncSession) -> ProductPublic:
    dto = parse_payload(ProductId, payload)
    product = await get_service(session).find_one(dto.id)
    return ProductPublic.model_validate(product)


@router.command("update_product")
async def update_product(payload: Any, session: AsyncSession) -> ProductPublic:
    dto = parse_payload(ProductUpdate, payload)
    product = await get_service(session).update(dto.id, dto.changes())
    return ProductPublic.model_validate(product)


@router.command("remove_product")
async def remove_product(payload: Any, session: AsyncSession) -> ProductPublic:
    dto = parse_payload(ProductId, payload)
    product = await get_service(session).remove(dto.id)
    return ProductPublic.model_validate(product)


@router.command("validate_products")
async def validate_products(
    payload: Any, session: AsyncSession
) -> list[ProductPublic]:
    """
    Проверка списка ID перед оформлением заказа.
    """
    ids = parse_payload(_product_ids, payload)
    products = await get_service(session).validate_products(ids)
    return [ProductPublic.model_validate(product) for product in products]
