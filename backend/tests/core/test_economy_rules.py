"""Economy Rules: pure pricing, funds and stat-delta checks.

Tests cover:
    - sale_price floors 60% exactly (no float drift)
    - purchase_total sums price * count and reports the first unknown code
    - validate_purchase_lines rejects counts below 1
    - check_funds raises InsufficientFundsError only when money < cost
    - equip_delta and unequip_delta cancel out
"""

import pytest

from gameshop.core.domain_types import CatalogItem, ItemCode, PurchaseLine
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
    ErrorKind,
    InsufficientFundsError,
    ResourceNotFoundError,
    ValidationError,
)


def _catalog() -> dict[str, CatalogItem]:
    return {
        "SWORD": CatalogItem(ItemCode("SWORD"), "Iron Sword", 3000, health=20, power=15),
        "POTION": CatalogItem(ItemCode("POTION"), "Red Potion", 2999),
    }


# ─── sale_price ──────────────────────────────────────────────────

def test_sale_price_is_sixty_percent():
    assert sale_price(3000) == 1800


def test_sale_price_floors_fractional_result():
    assert sale_price(2999) == 1799  # 1799.4
    assert sale_price(1) == 0
    assert sale_price(5) == 3


def test_sale_price_of_free_item_is_zero():
    assert sale_price(0) == 0


# ─── purchase_total ──────────────────────────────────────────────

def test_purchase_total_sums_price_times_count():
    lines = [
        PurchaseLine(ItemCode("SWORD"), 2),
        PurchaseLine(ItemCode("POTION"), 3),
    ]
    assert purchase_total(lines, _catalog()) == 2 * 3000 + 3 * 2999


def test_purchase_total_counts_repeated_codes():
    lines = [PurchaseLine(ItemCode("SWORD"), 1), PurchaseLine(ItemCode("SWORD"), 1)]
    assert purchase_total(lines, _catalog()) == 6000


def test_purchase_total_reports_first_unknown_code():
    lines = [
        PurchaseLine(ItemCode("SWORD"), 1),
        PurchaseLine(ItemCode("AXE"), 1),
        PurchaseLine(ItemCode("BOW"), 1),
    ]
    with pytest.raises(ResourceNotFoundError) as exc_info:
        purchase_total(lines, _catalog())
    assert exc_info.value.kind == ErrorKind.NOT_FOUND
    assert exc_info.value.resource_id == "AXE"
    assert exc_info.value.context.item_code == "AXE"


def test_purchase_total_of_empty_list_is_zero():
    assert purchase_total([], _catalog()) == 0


def test_purchased_counts_merges_lines_by_code():
    lines = [
        PurchaseLine(ItemCode("SWORD"), 2),
        PurchaseLine(ItemCode("POTION"), 1),
        PurchaseLine(ItemCode("SWORD"), 1),
    ]
    assert purchased_counts(lines) == {"SWORD": 3, "POTION": 1}


def test_require_catalog_item_returns_entry():
    assert require_catalog_item(_catalog(), "SWORD").item_price == 3000


# ─── validate_purchase_lines ─────────────────────────────────────

@pytest.mark.parametrize("count", [0, -1])
def test_validate_purchase_lines_rejects_non_positive_count(count):
    with pytest.raises(ValidationError) as exc_info:
        validate_purchase_lines([PurchaseLine(ItemCode("SWORD"), count)])
    assert exc_info.value.field == "count"
    assert exc_info.value.kind == ErrorKind.VALIDATION


def test_validate_purchase_lines_accepts_positive_counts():
    validate_purchase_lines([PurchaseLine(ItemCode("SWORD"), 1)])


# ─── check_funds ─────────────────────────────────────────────────

def test_check_funds_allows_exact_balance():
    check_funds(6000, 6000)


def test_check_funds_rejects_shortfall():
    with pytest.raises(InsufficientFundsError) as exc_info:
        check_funds(5999, 6000)
    assert exc_info.value.required == 6000
    assert exc_info.value.available == 5999
    assert exc_info.value.http_status == 400


# ─── stat deltas ─────────────────────────────────────────────────

def test_equip_and_unequip_deltas_cancel():
    sword = _catalog()["SWORD"]
    up = equip_delta(sword)
    down = unequip_delta(sword)
    assert up == (20, 15)
    assert (up[0] + down[0], up[1] + down[1]) == (0, 0)
