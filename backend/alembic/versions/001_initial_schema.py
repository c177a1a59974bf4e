"""Initial schema: accounts, characters, items, inventory_entries, equipped_entries.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("login", sa.String(50), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(100), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "characters",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "account_id", UUID(as_uuid=True),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
        sa.Column("health", sa.Integer, nullable=False),
        sa.Column("power", sa.Integer, nullable=False),
        sa.Column("money", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("money >= 0", name="ck_characters_money_non_negative"),
    )
    op.create_index("ix_characters_account_id", "characters", ["account_id"])

    op.create_table(
        "items",
        sa.Column("item_code", sa.String(64), primary_key=True),
        sa.Column("item_name", sa.String(100), nullable=False),
        sa.Column("item_price", sa.Integer, nullable=False),
        sa.Column("health", sa.Integer, nullable=False, server_default="0"),
        sa.Column("power", sa.Integer, nullable=False, server_default="0"),
        sa.CheckConstraint("item_price >= 0", name="ck_items_price_non_negative"),
    )

    op.create_table(
        "inventory_entries",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "character_id", UUID(as_uuid=True),
            sa.ForeignKey("characters.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("item_code", sa.String(64), sa.ForeignKey("items.item_code"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_inventory_entries_character_item", "inventory_entries",
        ["character_id", "item_code"],
    )

    op.create_table(
        "equipped_entries",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "character_id", UUID(as_uuid=True),
            sa.ForeignKey("characters.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("item_code", sa.String(64), sa.ForeignKey("items.item_code"), nullable=False),
        sa.Column("equipped_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint(
            "character_id", "item_code", name="uq_equipped_entries_character_item",
        ),
    )


def downgrade() -> None:
    op.drop_table("equipped_entries")
    op.drop_index("ix_inventory_entries_character_item", table_name="inventory_entries")
    op.drop_table("inventory_entries")
    op.drop_table("items")
    op.drop_index("ix_characters_account_id", table_name="characters")
    op.drop_table("characters")
    op.drop_table("accounts")
