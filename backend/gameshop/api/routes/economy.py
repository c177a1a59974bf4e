"""Economy Routes: purchase, sell, inventory, equipment and money accrual.

Invariants:
    - Every endpoint except GET /equipped requires an authenticated owner
    - Routes only translate HTTP <-> EconomyEngine; rules live in services/ and core/
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from gameshop.api.deps import get_current_account, get_economy_engine
from gameshop.core.domain_types import ItemCode
from gameshop.core.format_responses import (
    format_earn,
    format_equipped,
    format_inventory,
    format_purchase,
    format_sale,
    format_stats,
)
from gameshop.schemas.economy import (
    EquipRequest,
    EquippedItem,
    InventoryItem,
    MoneyResponse,
    PurchaseItem,
    SellItem,
    StatsResponse,
)
from gameshop.services.account_service import AccountInfo
from gameshop.services.economy_engine import EconomyEngine

router = APIRouter(prefix="/api/v1/characters", tags=["economy"])


@router.post("/{character_id}/purchase", response_model=MoneyResponse)
async def purchase_items(
    character_id: UUID,
    body: list[PurchaseItem],
    account: AccountInfo = Depends(get_current_account),
    engine: EconomyEngine = Depends(get_economy_engine),
):
    result = await engine.purchase(
        character_id, account.account_id, [item.to_domain() for item in body],
    )
    return format_purchase(result)


@router.post("/{character_id}/sell", response_model=MoneyResponse)
async def sell_items(
    character_id: UUID,
    body: list[SellItem],
    account: AccountInfo = Depends(get_current_account),
    engine: EconomyEngine = Depends(get_economy_engine),
):
    result = await engine.sell(
        character_id, account.account_id, [item.to_domain() for item in body],
    )
    return format_sale(result)


@router.get("/{character_id}/inventory", response_model=list[InventoryItem])
async def get_inventory(
    character_id: UUID,
    account: AccountInfo = Depends(get_current_account),
    engine: EconomyEngine = Depends(get_economy_engine),
):
    return format_inventory(
        await engine.inventory_view(character_id, account.account_id),
    )


@router.get("/{character_id}/equipped", response_model=list[EquippedItem])
async def get_equipped(
    character_id: UUID,
    engine: EconomyEngine = Depends(get_economy_engine),
):
    """Public: anyone may inspect a character's equipment."""
    return format_equipped(await engine.equipped_view(character_id))


@router.post("/{character_id}/equip", response_model=StatsResponse)
async def equip_item(
    character_id: UUID,
    body: EquipRequest,
    account: AccountInfo = Depends(get_current_account),
    engine: EconomyEngine = Depends(get_economy_engine),
):
    result = await engine.equip(
        character_id, account.account_id, ItemCode(body.item_code),
    )
    return format_stats(result, equipped=True)


@router.post("/{character_id}/unequip", response_model=StatsResponse)
async def unequip_item(
    character_id: UUID,
    body: EquipRequest,
    account: AccountInfo = Depends(get_current_account),
    engine: EconomyEngine = Depends(get_economy_engine),
):
    result = await engine.unequip(
        character_id, account.account_id, ItemCode(body.item_code),
    )
    return format_stats(result, equipped=False)


@router.post("/{character_id}/earn-money", response_model=MoneyResponse)
async def earn_money(
    character_id: UUID,
    account: AccountInfo = Depends(get_current_account),
    engine: EconomyEngine = Depends(get_economy_engine),
):
    money = await engine.earn_money(character_id, account.account_id)
    return format_earn(money, engine.earn_amount)
