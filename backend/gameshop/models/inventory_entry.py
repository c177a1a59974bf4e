"""InventoryEntry ORM: one unequipped unit of an item held by a character.

Invariants:
    - One row per unit; rows with the same item_code are counted, never merged
    - Created by purchase/unequip, destroyed by sale/equip only
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from gameshop.db.base import Base


class InventoryEntry(Base):
    """Inventory unit entity."""
    __tablename__ = "inventory_entries"
    __table_args__ = (
        Index("ix_inventory_entries_character_item", "character_id", "item_code"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    character_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("characters.id", ondelete="CASCADE"),
        nullable=False,
    )
    item_code: Mapped[str] = mapped_column(
        String(64), ForeignKey("items.item_code"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    character: Mapped["Character"] = relationship(
        "Character", back_populates="inventory",
    )
