"""DatabaseSessionManager: transaction boundaries and error mapping."""

import pytest
from sqlalchemy import select, text

from gameshop.core.errors import ErrorKind, InsufficientFundsError, StoreUnavailableError
from gameshop.infrastructure import database
from gameshop.infrastructure.database import get_store
from gameshop.models.item import Item


async def test_run_transaction_commits_on_return(store):
    async def _insert(db):
        db.add(Item(item_code="GEM", item_name="Gem", item_price=10))

    await store.run_transaction(_insert)

    async def _read(db):
        return (await db.execute(select(Item.item_name))).scalars().all()

    assert await store.run_transaction(_read) == ["Gem"]


async def test_domain_error_rolls_back(store):
    async def _insert_then_fail(db):
        db.add(Item(item_code="GEM", item_name="Gem", item_price=10))
        await db.flush()
        raise InsufficientFundsError(10, 0)

    with pytest.raises(InsufficientFundsError):
        await store.run_transaction(_insert_then_fail)

    async def _count(db):
        return len((await db.execute(select(Item))).scalars().all())

    assert await store.run_transaction(_count) == 0


async def test_operational_error_maps_to_store_unavailable(store):
    async def _bad(db):
        await db.execute(text("SELECT * FROM no_such_table"))

    with pytest.raises(StoreUnavailableError) as exc_info:
        await store.run_transaction(_bad)
    assert exc_info.value.kind == ErrorKind.STORE_UNAVAILABLE
    assert exc_info.value.http_status == 503


async def test_integrity_error_maps_to_store_unavailable(store, catalog):
    async def _duplicate(db):
        db.add(Item(item_code="SWORD", item_name="Copy", item_price=1))
        await db.flush()

    with pytest.raises(StoreUnavailableError):
        await store.run_transaction(_duplicate)


async def test_foreign_keys_enforced(store):
    from uuid import uuid4

    from gameshop.models.inventory_entry import InventoryEntry

    async def _orphan(db):
        db.add(InventoryEntry(character_id=uuid4(), item_code="NOPE"))
        await db.flush()

    with pytest.raises(StoreUnavailableError):
        await store.run_transaction(_orphan)


async def test_health_check(store):
    assert await store.health_check() is True


def test_get_store_requires_init(monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)
    with pytest.raises(RuntimeError):
        get_store()
