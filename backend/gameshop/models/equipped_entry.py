"""EquippedEntry ORM: the unit of an item a character currently wears.

Invariants:
    - At most one row per (character_id, item_code), enforced by a unique constraint
    - A unit lives here or in inventory_entries, never both
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from gameshop.db.base import Base


class EquippedEntry(Base):
    """Equipped unit entity."""
    __tablename__ = "equipped_entries"
    __table_args__ = (
        UniqueConstraint(
            "character_id", "item_code", name="uq_equipped_entries_character_item",
        ),
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
    equipped_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    character: Mapped["Character"] = relationship(
        "Character", back_populates="equipped",
    )
