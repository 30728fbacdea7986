"""Тесты хранилища товаров на SQLite."""

import pytest

from catalog_service.repositories.product_store import SqlProductStore
from catalog_service.services.exceptions import ProductNotFoundError


async def test_insert_assigns_id_and_defaults(store: SqlProductStore) -> None:
    product = await store.insert(name="Отвертка", price=3.5)

    assert product.id is not None
    assert product.available is True
    assert product.created_at is not None
    assert product.updated_at is not None


async def test_count_and_scan_respect_availability(store: SqlProductStore) -> None:
    first = await store.insert(name="A", price=1)
    await store.insert(name="B", price=2)
    await store.update_fields(first.id, {"available": False})  # type: ignore[arg-type]

    assert await store.count() == 1
    assert await store.count(available=False) == 1
    assert [p.name for p in await store.scan(offset=0, limit=10)] == ["B"]
    assert [p.name for p in await store.scan(0, 10, available=False)] == ["A"]


async def test_scan_is_ordered_and_windowed(store: SqlProductStore) -> None:
    for i in range(5):
        await store.insert(name=f"P{i}", price=i)

    window = await store.scan(offset=1, limit=2)

    assert [p.name for p in window] == ["P1", "P2"]
    assert await store.scan(offset=5, limit=2) == []


async def test_get_filters_by_availability(store: SqlProductStore) -> None:
    product = await store.insert(name="A", price=1)
    assert await store.get(product.id) is not None  # type: ignore[arg-type]

    await store.update_fields(product.id, {"available": False})  # type: ignore[arg-type]

    assert await store.get(product.id) is None  # type: ignore[arg-type]
    assert await store.get(product.id, available=False) is not None  # type: ignore[arg-type]
    assert await store.get(999) is None


async def test_update_fields(store: SqlProductStore) -> None:
    product = await store.insert(name="A", price=1)
    created_at = product.created_at

    updated = await store.update_fields(product.id, {"price": 2.5})  # type: ignore[arg-type]

    assert updated.name == "A"
    assert updated.price == 2.5
    assert updated.created_at == created_at
    assert updated.updated_at >= created_at


async def test_update_fields_missing_id(store: SqlProductStore) -> None:
    with pytest.raises(ProductNotFoundError):
        await store.update_fields(42, {"name": "X"})


async def test_update_fields_rejects_unknown_field(store: SqlProductStore) -> None:
    product = await store.insert(name="A", price=1)
    with pytest.raises(ValueError):
        await store.update_fields(product.id, {"id": 7})  # type: ignore[arg-type]


async def test_find_by_ids(store: SqlProductStore) -> None:
    a = await store.insert(name="A", price=1)
    b = await store.insert(name="B", price=1)
    c = await store.insert(name="C", price=1)
    await store.update_fields(c.id, {"available": False})  # type: ignore[arg-type]

    found = await store.find_by_ids([b.id, a.id, c.id, 100])  # type: ignore[list-item]

    assert {p.id for p in found} == {a.id, b.id}
    assert await store.find_by_ids([]) == []


async def test_out_of_range_ids_are_missing(store: SqlProductStore) -> None:
    product = await store.insert(name="A", price=1)

    assert await store.get(2**63) is None
    assert await store.get(0) is None
    assert [p.id for p in await store.find_by_ids([product.id, 2**63])] == [  # type: ignore[list-item]
        product.id
    ]
    with pytest.raises(ProductNotFoundError):
        await store.update_fields(2**63, {"name": "X"})
