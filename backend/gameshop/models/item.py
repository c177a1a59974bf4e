"""Item ORM: the externally seeded item catalog.

Invariants:
    - item_code is the stable key referenced by inventory and equipped rows
    - Read-only to the economy engine
"""

from sqlalchemy import String, Integer, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from gameshop.db.base import Base
from gameshop.core.domain_types import CatalogItem, ItemCode


class Item(Base):
    """Catalog entry: price and the stat modifiers granted while equipped."""
    __tablename__ = "items"
    __table_args__ = (
        CheckConstraint("item_price >= 0", name="ck_items_price_non_negative"),
    )

    item_code: Mapped[str] = mapped_column(String(64), primary_key=True)
    item_name: Mapped[str] = mapped_column(String(100), nullable=False)
    item_price: Mapped[int] = mapped_column(Integer, nullable=False)
    health: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    power: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def to_catalog_item(self) -> CatalogItem:
        return CatalogItem(
            item_code=ItemCode(self.item_code),
            item_name=self.item_name,
            item_price=self.item_price,
            health=self.health,
            power=self.power,
        )
