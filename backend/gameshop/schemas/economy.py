"""Economy Schemas: purchase, sell and equip payloads plus their responses.

Invariants:
    - Purchase counts are >= 1
    - item_code is a non-empty catalog key
    - to_domain() converts request bodies into core PurchaseLine/SaleLine values
"""

from pydantic import BaseModel, Field

from gameshop.core.domain_types import ItemCode, PurchaseLine, SaleLine


class PurchaseItem(BaseModel):
    item_code: str = Field(min_length=1, max_length=64)
    count: int = Field(ge=1, le=1000)

    def to_domain(self) -> PurchaseLine:
        return PurchaseLine(ItemCode(self.item_code), self.count)


class SellItem(BaseModel):
    item_code: str = Field(min_length=1, max_length=64)

    def to_domain(self) -> SaleLine:
        return SaleLine(ItemCode(self.item_code))


class EquipRequest(BaseModel):
    item_code: str = Field(min_length=1, max_length=64)


class MoneyResponse(BaseModel):
    message: str
    money: int


class StatsResponse(BaseModel):
    message: str
    health: int
    power: int


class InventoryItem(BaseModel):
    item_code: str
    item_name: str
    count: int


class EquippedItem(BaseModel):
    item_code: str
    item_name: str
    health: int
    power: int
