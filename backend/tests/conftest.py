"""Root conftest: environment defaults and a real per-test database.

Invariants:
    - Every test gets a fresh SQLite database file (tmp_path), schema from Base.metadata
    - The store is a real DatabaseSessionManager, so transactions, BEGIN IMMEDIATE
      serialization and FK cascades behave as in the app
    - Factories (make_account, make_character, read_state) are fixtures because
      test modules do not import each other

Design Decisions:
    - File database over :memory:: concurrent transactions need separate connections
      to the same database
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("JWT_SECRET", "test-secret-key-with-enough-length-32b")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy import func, select  # noqa: E402

from gameshop.db.base import Base  # noqa: E402
from gameshop.infrastructure.database import DatabaseSessionManager  # noqa: E402
from gameshop.models.account import Account  # noqa: E402
from gameshop.models.character import Character  # noqa: E402
from gameshop.models.equipped_entry import EquippedEntry  # noqa: E402
from gameshop.models.inventory_entry import InventoryEntry  # noqa: E402
from gameshop.models.item import Item  # noqa: E402


@pytest.fixture
async def store(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'gameshop.db'}",
    )
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
async def catalog(store):
    """SWORD 3000 (+20/+15), SHIELD 1000 (+50/+0), POTION 2999 (no modifiers)."""
    rows = {
        "SWORD": dict(item_name="Iron Sword", item_price=3000, health=20, power=15),
        "SHIELD": dict(item_name="Oak Shield", item_price=1000, health=50, power=0),
        "POTION": dict(item_name="Red Potion", item_price=2999, health=0, power=0),
    }

    async def _tx(db):
        db.add_all([Item(item_code=code, **data) for code, data in rows.items()])

    await store.run_transaction(_tx)
    return rows


@pytest.fixture
def make_account(store):
    async def _make(login: str = "owner") -> Account:
        account = Account(login=login, password_hash="not-a-real-hash", name=login.title())

        async def _tx(db):
            db.add(account)
            await db.flush()
            return account

        return await store.run_transaction(_tx)

    return _make


@pytest.fixture
def make_character(store):
    async def _make(
        account: Account, name: str = "Hero", money: int = 10_000,
        health: int = 500, power: int = 100,
    ) -> Character:
        character = Character(
            account_id=account.id, name=name,
            health=health, power=power, money=money,
        )

        async def _tx(db):
            db.add(character)
            await db.flush()
            return character

        return await store.run_transaction(_tx)

    return _make


@pytest.fixture
async def owner(make_account):
    return await make_account("owner")


@pytest.fixture
async def stranger(make_account):
    return await make_account("stranger")


@pytest.fixture
async def character(make_character, owner, catalog):
    return await make_character(owner)


@pytest.fixture
def read_state(store):
    """Snapshot of a character: money/health/power, inventory counts, equipped codes."""

    async def _read(character_id) -> dict | None:
        async def _tx(db):
            row = (await db.execute(
                select(Character.money, Character.health, Character.power)
                .where(Character.id == character_id),
            )).one_or_none()
            inventory = dict((await db.execute(
                select(InventoryEntry.item_code, func.count(InventoryEntry.id))
                .where(InventoryEntry.character_id == character_id)
                .group_by(InventoryEntry.item_code),
            )).all())
            equipped = set((await db.execute(
                select(EquippedEntry.item_code)
                .where(EquippedEntry.character_id == character_id),
            )).scalars().all())
            if row is None:
                return None
            money, health, power = row
            return {
                "money": money, "health": health, "power": power,
                "inventory": inventory, "equipped": equipped,
            }

        return await store.run_transaction(_tx)

    return _read
