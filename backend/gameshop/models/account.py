"""Account ORM: login identity that owns characters.

Invariants:
    - login is unique; password_hash is a bcrypt hash, never the raw password
    - Read-only after registration

Design Decisions:
    - cascade delete for characters: an account owns all its characters
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from gameshop.db.base import Base


class Account(Base):
    """Account entity: credentials plus display name."""
    __tablename__ = "accounts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    login: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True,
    )
    password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    characters: Mapped[list["Character"]] = relationship(
        "Character", back_populates="account",
        cascade="all, delete-orphan", passive_deletes=True,
    )
