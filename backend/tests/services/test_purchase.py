"""Purchase: all-or-nothing spending of money on catalog items.

Tests cover:
    - Successful purchase debits sum(price * count) and creates one row per unit
    - Insufficient funds leaves money and inventory untouched
    - Unknown item code aborts the whole purchase, naming the code
    - Ownership and missing-character checks run before anything else
    - A failing line late in the list rolls back earlier lines
"""

import pytest

from gameshop.core.domain_types import ItemCode, PurchaseLine
from gameshop.core.errors import (
    ErrorKind,
    ForbiddenError,
    InsufficientFundsError,
    ResourceNotFoundError,
    ValidationError,
)


def _lines(*pairs):
    return [PurchaseLine(ItemCode(code), count) for code, count in pairs]


async def test_purchase_debits_total_and_adds_units(engine, character, owner, read_state):
    result = await engine.purchase(
        character.id, owner.id, _lines(("SWORD", 2), ("SHIELD", 1)),
    )

    assert result.total_cost == 7000
    assert result.money == 3000
    assert result.purchased == {"SWORD": 2, "SHIELD": 1}
    state = await read_state(character.id)
    assert state["money"] == 3000
    assert state["inventory"] == {"SWORD": 2, "SHIELD": 1}


async def test_purchase_of_exact_balance_leaves_zero(engine, make_character, owner, catalog, read_state):
    poor = await make_character(owner, name="Poor", money=3000)
    result = await engine.purchase(poor.id, owner.id, _lines(("SWORD", 1)))
    assert result.money == 0
    assert (await read_state(poor.id))["inventory"] == {"SWORD": 1}


async def test_purchase_stacks_with_existing_units(engine, character, owner, read_state):
    await engine.purchase(character.id, owner.id, _lines(("SHIELD", 1)))
    await engine.purchase(character.id, owner.id, _lines(("SHIELD", 2)))
    state = await read_state(character.id)
    assert state["inventory"] == {"SHIELD": 3}
    assert state["money"] == 7000


async def test_insufficient_funds_changes_nothing(engine, character, owner, read_state):
    with pytest.raises(InsufficientFundsError) as exc_info:
        await engine.purchase(character.id, owner.id, _lines(("SWORD", 4)))

    assert exc_info.value.kind == ErrorKind.INSUFFICIENT_FUNDS
    assert exc_info.value.required == 12_000
    state = await read_state(character.id)
    assert state["money"] == 10_000
    assert state["inventory"] == {}


async def test_unknown_item_code_aborts_whole_purchase(engine, character, owner, read_state):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await engine.purchase(
            character.id, owner.id, _lines(("SWORD", 1), ("DRAGON_EGG", 1)),
        )

    assert exc_info.value.resource_id == "DRAGON_EGG"
    state = await read_state(character.id)
    assert state["money"] == 10_000
    assert state["inventory"] == {}


async def test_zero_count_is_rejected(engine, character, owner, read_state):
    with pytest.raises(ValidationError):
        await engine.purchase(character.id, owner.id, _lines(("SWORD", 0)))
    assert (await read_state(character.id))["money"] == 10_000


async def test_empty_purchase_keeps_balance(engine, character, owner):
    result = await engine.purchase(character.id, owner.id, [])
    assert result.money == 10_000
    assert result.total_cost == 0


async def test_purchase_for_foreign_character_is_forbidden(engine, character, stranger, read_state):
    with pytest.raises(ForbiddenError):
        await engine.purchase(character.id, stranger.id, _lines(("SHIELD", 1)))

    state = await read_state(character.id)
    assert state["money"] == 10_000
    assert state["inventory"] == {}


async def test_purchase_for_missing_character_is_not_found(engine, owner, catalog):
    from uuid import uuid4

    with pytest.raises(ResourceNotFoundError) as exc_info:
        await engine.purchase(uuid4(), owner.id, _lines(("SHIELD", 1)))
    assert exc_info.value.resource_type == "Character"
