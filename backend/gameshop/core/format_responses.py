"""Response Formatting: pure mapping from engine results to API payloads.

Invariants:
    - money is only exposed to the character's owner
    - Formatters never touch the DB; they receive plain results or CharacterLike objects
"""

from uuid import UUID

from gameshop.core.domain_types import (
    EquippedLine,
    InventoryLine,
    PurchaseResult,
    SaleResult,
    StatsResult,
)
from gameshop.core.enforce_ownership import is_owner
from gameshop.core.repository_protocols import CharacterLike


def format_character(character: CharacterLike, viewer_id: UUID | None) -> dict:
    data = {
        "name": character.name,
        "health": character.health,
        "power": character.power,
    }
    if is_owner(character, viewer_id):
        data["money"] = character.money
    return data


def format_purchase(result: PurchaseResult) -> dict:
    return {"message": "Items purchased", "money": result.money}


def format_sale(result: SaleResult) -> dict:
    return {"message": "Items sold", "money": result.money}


def format_earn(money: int, amount: int) -> dict:
    return {"message": f"Earned {amount} money", "money": money}


def format_stats(result: StatsResult, equipped: bool) -> dict:
    verb = "equipped" if equipped else "unequipped"
    return {
        "message": f"Item '{result.item_code}' {verb}",
        "health": result.health,
        "power": result.power,
    }


def format_inventory(lines: list[InventoryLine]) -> list[dict]:
    return [
        {"item_code": line.item_code, "item_name": line.item_name, "count": line.count}
        for line in lines
    ]


def format_equipped(lines: list[EquippedLine]) -> list[dict]:
    return [
        {
            "item_code": line.item_code,
            "item_name": line.item_name,
            "health": line.health,
            "power": line.power,
        }
        for line in lines
    ]
