"""Economy Rules: pure pricing, funds and stat arithmetic for the economy engine.

Invariants:
    - All functions are pure (no IO, no async, no DB)
    - Sale price is floor(price * 3/5), computed with exact rational arithmetic
    - Equip adds modifiers, unequip subtracts the same modifiers (round-trip is identity)
    - A purchase line must request at least one unit

Design Decisions:
    - Fraction over float for the sale ratio: floor(2999 * 0.6) must not depend on
      binary rounding
    - Catalog passed in as a dict: services/ resolve it inside the transaction,
      rules never see the session
"""

import math
from collections import Counter
from fractions import Fraction

from gameshop.core.domain_types import CatalogItem, PurchaseLine
from gameshop.core.errors import (
    ErrorContext,
    InsufficientFundsError,
    ResourceNotFoundError,
    ValidationError,
)

SALE_RATIO = Fraction(3, 5)


def sale_price(item_price: int) -> int:
    """Money credited for selling one unit."""
    return math.floor(item_price * SALE_RATIO)


def require_catalog_item(
    catalog: dict[str, CatalogItem], item_code: str,
) -> CatalogItem:
    """Return the catalog entry or raise NotFound naming the code."""
    item = catalog.get(item_code)
    if item is None:
        raise ResourceNotFoundError(
            "Item", item_code, ErrorContext(item_code=item_code),
        )
    return item


def validate_purchase_lines(lines: list[PurchaseLine]) -> None:
    for line in lines:
        if line.count < 1:
            raise ValidationError(
                f"Purchase count for '{line.item_code}' must be at least 1",
                "count", ErrorContext(item_code=line.item_code),
            )


def purchase_total(
    lines: list[PurchaseLine], catalog: dict[str, CatalogItem],
) -> int:
    """Sum of price * count, resolving codes in list order.

    The first unknown code in the list is the one reported.
    """
    total = 0
    for line in lines:
        total += require_catalog_item(catalog, line.item_code).item_price * line.count
    return total


def purchased_counts(lines: list[PurchaseLine]) -> dict[str, int]:
    counts: Counter[str] = Counter()
    for line in lines:
        counts[line.item_code] += line.count
    return dict(counts)


def check_funds(money: int, total_cost: int) -> None:
    if money < total_cost:
        raise InsufficientFundsError(total_cost, money)


def equip_delta(item: CatalogItem) -> tuple[int, int]:
    """(health, power) change applied when the item is equipped."""
    return item.health, item.power


def unequip_delta(item: CatalogItem) -> tuple[int, int]:
    return -item.health, -item.power
