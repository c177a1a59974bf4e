"""Economy Engine: purchase, sell, equip, unequip and money accrual as atomic transitions.

Invariants:
    - Every operation authorizes first, then runs in exactly one store transaction;
      a raised error rolls back everything the operation did
    - money never goes negative: debits are conditional updates (WHERE money >= cost)
    - A unit is consumed at most once: inventory deletes check the affected row count
    - Sell walks the request in list order and deletes each unit before checking the
      next entry, so a repeated code needs a second physical unit
    - Equip and unequip apply opposite stat deltas from the same catalog entry
    - State is re-read inside every transaction; nothing is cached between calls

Design Decisions:
    - Relative UPDATEs (money = money - :cost) instead of read-modify-write on the ORM
      object: the store does the arithmetic under its own isolation
    - Catalog rows resolved once per transaction into CatalogItem snapshots, then the
      pure rules in core/economy_rules.py decide
"""

import logging
from collections import Counter
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gameshop.core.domain_types import (
    CatalogItem,
    EquippedLine,
    InventoryLine,
    ItemCode,
    PurchaseLine,
    PurchaseResult,
    SaleLine,
    SaleResult,
    StatsResult,
)
from gameshop.core.economy_rules import (
    check_funds,
    equip_delta,
    purchase_total,
    purchased_counts,
    require_catalog_item,
    sale_price,
    unequip_delta,
    validate_purchase_lines,
)
from gameshop.core.errors import (
    AlreadyEquippedError,
    ErrorContext,
    InsufficientFundsError,
    InventoryMissingError,
    ItemEquippedError,
    NotEquippedError,
    ResourceNotFoundError,
)
from gameshop.core.repository_protocols import EntityStore
from gameshop.models.character import Character
from gameshop.models.equipped_entry import EquippedEntry
from gameshop.models.inventory_entry import InventoryEntry
from gameshop.models.item import Item
from gameshop.services.access_guard import authorize, load_character

logger = logging.getLogger(__name__)

DEFAULT_EARN_AMOUNT = 100


class EconomyEngine:
    """Character economy operations over an EntityStore."""

    def __init__(self, store: EntityStore, earn_amount: int = DEFAULT_EARN_AMOUNT):
        self.store = store
        self.earn_amount = earn_amount

    # ─── Purchase / Sell ─────────────────────────────────────────

    async def purchase(
        self, character_id: UUID, account_id: UUID, lines: list[PurchaseLine],
    ) -> PurchaseResult:
        """Spend money on catalog items; all lines succeed or none do."""

        async def _tx(db: AsyncSession) -> PurchaseResult:
            character = await authorize(db, account_id, character_id)
            validate_purchase_lines(lines)
            catalog = await _load_catalog(db, {line.item_code for line in lines})
            total_cost = purchase_total(lines, catalog)
            check_funds(character.money, total_cost)

            await _debit(db, character_id, total_cost)
            db.add_all([
                InventoryEntry(character_id=character_id, item_code=line.item_code)
                for line in lines
                for _ in range(line.count)
            ])
            await db.flush()
            return PurchaseResult(
                money=await _read_money(db, character_id),
                total_cost=total_cost,
                purchased=purchased_counts(lines),
            )

        result = await self.store.run_transaction(_tx)
        logger.info(
            f"Purchase committed for character {character_id}",
            extra={
                "character_id": character_id, "account_id": account_id,
                "total_cost": result.total_cost, "money": result.money,
            },
        )
        return result

    async def sell(
        self, character_id: UUID, account_id: UUID, lines: list[SaleLine],
    ) -> SaleResult:
        """Sell one unit per line at 60% of catalog price (floored)."""

        async def _tx(db: AsyncSession) -> SaleResult:
            await authorize(db, account_id, character_id)
            catalog = await _load_catalog(db, {line.item_code for line in lines})
            revenue = 0
            sold: Counter[str] = Counter()

            for line in lines:
                code = line.item_code
                unit_id = await _find_inventory_unit(db, character_id, code)
                if unit_id is None:
                    raise InventoryMissingError(code, _ctx(account_id, character_id))
                if await _find_equipped(db, character_id, code) is not None:
                    raise ItemEquippedError(code, _ctx(account_id, character_id))
                item = require_catalog_item(catalog, code)

                revenue += sale_price(item.item_price)
                await _consume_unit(db, unit_id, code)
                sold[code] += 1

            await _credit(db, character_id, revenue)
            return SaleResult(
                money=await _read_money(db, character_id),
                revenue=revenue,
                sold=dict(sold),
            )

        result = await self.store.run_transaction(_tx)
        logger.info(
            f"Sale committed for character {character_id}",
            extra={
                "character_id": character_id, "account_id": account_id,
                "revenue": result.revenue, "money": result.money,
            },
        )
        return result

    # ─── Equip / Unequip ─────────────────────────────────────────

    async def equip(
        self, character_id: UUID, account_id: UUID, item_code: ItemCode,
    ) -> StatsResult:
        """Move one unit from inventory to equipped and add its modifiers."""

        async def _tx(db: AsyncSession) -> StatsResult:
            await authorize(db, account_id, character_id)
            unit_id = await _find_inventory_unit(db, character_id, item_code)
            if unit_id is None:
                raise InventoryMissingError(item_code, _ctx(account_id, character_id))
            if await _find_equipped(db, character_id, item_code) is not None:
                raise AlreadyEquippedError(item_code, _ctx(account_id, character_id))
            catalog = await _load_catalog(db, {item_code})
            item = require_catalog_item(catalog, item_code)

            await _adjust_stats(db, character_id, *equip_delta(item))
            db.add(EquippedEntry(character_id=character_id, item_code=item_code))
            try:
                await db.flush()
            except IntegrityError:
                raise AlreadyEquippedError(item_code, _ctx(account_id, character_id))
            await _consume_unit(db, unit_id, item_code)
            return await _read_stats(db, character_id, item_code)

        result = await self.store.run_transaction(_tx)
        logger.info(
            f"Item {item_code} equipped on character {character_id}",
            extra={"character_id": character_id, "item_code": item_code},
        )
        return result

    async def unequip(
        self, character_id: UUID, account_id: UUID, item_code: ItemCode,
    ) -> StatsResult:
        """Exact inverse of equip: subtract modifiers and return the unit to inventory."""

        async def _tx(db: AsyncSession) -> StatsResult:
            await authorize(db, account_id, character_id)
            equipped_id = await _find_equipped(db, character_id, item_code)
            if equipped_id is None:
                raise NotEquippedError(item_code, _ctx(account_id, character_id))
            catalog = await _load_catalog(db, {item_code})
            item = require_catalog_item(catalog, item_code)

            await _adjust_stats(db, character_id, *unequip_delta(item))
            removed = await db.execute(
                delete(EquippedEntry)
                .where(EquippedEntry.id == equipped_id)
                .execution_options(synchronize_session=False),
            )
            if removed.rowcount != 1:
                raise NotEquippedError(item_code, _ctx(account_id, character_id))
            db.add(InventoryEntry(character_id=character_id, item_code=item_code))
            await db.flush()
            return await _read_stats(db, character_id, item_code)

        result = await self.store.run_transaction(_tx)
        logger.info(
            f"Item {item_code} unequipped from character {character_id}",
            extra={"character_id": character_id, "item_code": item_code},
        )
        return result

    # ─── Money ───────────────────────────────────────────────────

    async def earn_money(self, character_id: UUID, account_id: UUID) -> int:
        """Credit the fixed earn amount; returns the new balance."""

        async def _tx(db: AsyncSession) -> int:
            await authorize(db, account_id, character_id)
            await _credit(db, character_id, self.earn_amount)
            return await _read_money(db, character_id)

        money = await self.store.run_transaction(_tx)
        logger.info(
            f"Character {character_id} earned {self.earn_amount}",
            extra={"character_id": character_id, "money": money},
        )
        return money

    # ─── Views ───────────────────────────────────────────────────

    async def inventory_view(
        self, character_id: UUID, account_id: UUID,
    ) -> list[InventoryLine]:
        """Owner-only inventory grouped by item code."""

        async def _tx(db: AsyncSession) -> list[InventoryLine]:
            await authorize(db, account_id, character_id, for_update=False)
            result = await db.execute(
                select(
                    InventoryEntry.item_code, Item.item_name,
                    func.count(InventoryEntry.id),
                )
                .join(Item, Item.item_code == InventoryEntry.item_code)
                .where(InventoryEntry.character_id == character_id)
                .group_by(InventoryEntry.item_code, Item.item_name)
                .order_by(InventoryEntry.item_code),
            )
            return [
                InventoryLine(item_code=ItemCode(code), item_name=name, count=count)
                for code, name, count in result.all()
            ]

        return await self.store.run_transaction(_tx)

    async def equipped_view(self, character_id: UUID) -> list[EquippedLine]:
        """Public list of equipped items; no ownership check."""

        async def _tx(db: AsyncSession) -> list[EquippedLine]:
            if await load_character(db, character_id) is None:
                raise ResourceNotFoundError(
                    "Character", str(character_id),
                    ErrorContext(character_id=str(character_id)),
                )
            result = await db.execute(
                select(Item)
                .join(EquippedEntry, EquippedEntry.item_code == Item.item_code)
                .where(EquippedEntry.character_id == character_id)
                .order_by(EquippedEntry.equipped_at, Item.item_code),
            )
            return [
                EquippedLine(
                    item_code=ItemCode(item.item_code), item_name=item.item_name,
                    health=item.health, power=item.power,
                )
                for item in result.scalars().all()
            ]

        return await self.store.run_transaction(_tx)


# ─── Statement helpers (run inside the caller's transaction) ────


def _ctx(account_id: UUID, character_id: UUID) -> ErrorContext:
    return ErrorContext(account_id=str(account_id), character_id=str(character_id))


async def _load_catalog(db: AsyncSession, codes: set[str]) -> dict[str, CatalogItem]:
    if not codes:
        return {}
    result = await db.execute(select(Item).where(Item.item_code.in_(codes)))
    return {item.item_code: item.to_catalog_item() for item in result.scalars().all()}


async def _find_inventory_unit(
    db: AsyncSession, character_id: UUID, item_code: str,
) -> UUID | None:
    result = await db.execute(
        select(InventoryEntry.id)
        .where(
            InventoryEntry.character_id == character_id,
            InventoryEntry.item_code == item_code,
        )
        .order_by(InventoryEntry.created_at, InventoryEntry.id)
        .limit(1),
    )
    return result.scalar_one_or_none()


async def _find_equipped(
    db: AsyncSession, character_id: UUID, item_code: str,
) -> UUID | None:
    result = await db.execute(
        select(EquippedEntry.id)
        .where(
            EquippedEntry.character_id == character_id,
            EquippedEntry.item_code == item_code,
        )
        .limit(1),
    )
    return result.scalar_one_or_none()


async def _consume_unit(db: AsyncSession, unit_id: UUID, item_code: str) -> None:
    result = await db.execute(
        delete(InventoryEntry)
        .where(InventoryEntry.id == unit_id)
        .execution_options(synchronize_session=False),
    )
    if result.rowcount != 1:
        raise InventoryMissingError(item_code)


async def _debit(db: AsyncSession, character_id: UUID, amount: int) -> None:
    result = await db.execute(
        update(Character)
        .where(Character.id == character_id, Character.money >= amount)
        .values(money=Character.money - amount)
        .execution_options(synchronize_session=False),
    )
    if result.rowcount != 1:
        raise InsufficientFundsError(amount, await _read_money(db, character_id))


async def _credit(db: AsyncSession, character_id: UUID, amount: int) -> None:
    await db.execute(
        update(Character)
        .where(Character.id == character_id)
        .values(money=Character.money + amount)
        .execution_options(synchronize_session=False),
    )


async def _adjust_stats(
    db: AsyncSession, character_id: UUID, health: int, power: int,
) -> None:
    await db.execute(
        update(Character)
        .where(Character.id == character_id)
        .values(health=Character.health + health, power=Character.power + power)
        .execution_options(synchronize_session=False),
    )


async def _read_money(db: AsyncSession, character_id: UUID) -> int:
    result = await db.execute(
        select(Character.money).where(Character.id == character_id),
    )
    return result.scalar_one()


async def _read_stats(
    db: AsyncSession, character_id: UUID, item_code: ItemCode,
) -> StatsResult:
    result = await db.execute(
        select(Character.health, Character.power).where(Character.id == character_id),
    )
    health, power = result.one()
    return StatsResult(item_code=item_code, health=health, power=power)
