"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - AccountId, CharacterId wrap UUIDs; ItemCode wraps the catalog string key
    - Operation inputs and results are frozen dataclasses (no ORM objects leak out
      of services/)

Design Decisions:
    - NewType over dataclass wrappers for ids: zero runtime cost, full type-checker support
"""

from dataclasses import dataclass, field
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

AccountId = NewType("AccountId", UUID)
CharacterId = NewType("CharacterId", UUID)
ItemCode = NewType("ItemCode", str)


# ─── Operation Inputs ────────────────────────────────────────────

@dataclass(frozen=True)
class PurchaseLine:
    item_code: ItemCode
    count: int


@dataclass(frozen=True)
class SaleLine:
    item_code: ItemCode


@dataclass(frozen=True)
class CatalogItem:
    """Read-only snapshot of an ItemCatalog row."""
    item_code: ItemCode
    item_name: str
    item_price: int
    health: int = 0
    power: int = 0


# ─── Operation Results ───────────────────────────────────────────

@dataclass(frozen=True)
class PurchaseResult:
    money: int
    total_cost: int
    purchased: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class SaleResult:
    money: int
    revenue: int
    sold: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class StatsResult:
    """Character stats after an equip/unequip transition."""
    item_code: ItemCode
    health: int
    power: int


@dataclass(frozen=True)
class InventoryLine:
    item_code: ItemCode
    item_name: str
    count: int


@dataclass(frozen=True)
class EquippedLine:
    item_code: ItemCode
    item_name: str
    health: int
    power: int
