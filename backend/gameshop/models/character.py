"""Character ORM: per-account game character holding stats and money.

Invariants:
    - name is unique across all characters
    - money >= 0 (CHECK constraint backs the conditional updates in services/)
    - health/power equal base stats plus the modifiers of currently equipped items
    - Deleting a character deletes its inventory and equipped rows

Design Decisions:
    - passive_deletes on child collections: ON DELETE CASCADE does the work, the
      async session never lazy-loads children just to delete them
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from gameshop.db.base import Base


class Character(Base):
    """Character entity: economy aggregate root."""
    __tablename__ = "characters"
    __table_args__ = (
        CheckConstraint("money >= 0", name="ck_characters_money_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    account_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    health: Mapped[int] = mapped_column(Integer, nullable=False)
    power: Mapped[int] = mapped_column(Integer, nullable=False)
    money: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    account: Mapped["Account"] = relationship(
        "Account", back_populates="characters",
    )
    inventory: Mapped[list["InventoryEntry"]] = relationship(
        "InventoryEntry", back_populates="character",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    equipped: Mapped[list["EquippedEntry"]] = relationship(
        "EquippedEntry", back_populates="character",
        cascade="all, delete-orphan", passive_deletes=True,
    )
