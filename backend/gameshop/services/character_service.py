"""Character Service: create, read and delete characters.

Invariants:
    - Character names are unique (ConflictError on duplicates)
    - New characters start with the configured health/power/money and no items
    - Delete requires ownership and cascades inventory and equipped rows
    - Read is open to any authenticated account; money only shown to the owner
      (core/format_responses.py)
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gameshop.core.errors import ConflictError, ErrorContext, ResourceNotFoundError
from gameshop.core.repository_protocols import EntityStore
from gameshop.models.character import Character
from gameshop.services.access_guard import authorize, load_character

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartingStats:
    health: int = 500
    power: int = 100
    money: int = 10_000


class CharacterService:
    """Character lifecycle outside the economy engine."""

    def __init__(self, store: EntityStore, starting: StartingStats | None = None):
        self.store = store
        self.starting = starting or StartingStats()

    async def create(self, account_id: UUID, name: str) -> Character:
        async def _tx(db: AsyncSession) -> Character:
            existing = await db.execute(
                select(Character.id).where(Character.name == name),
            )
            if existing.scalar_one_or_none() is not None:
                raise ConflictError(f"Character name '{name}' is already taken")
            character = Character(
                account_id=account_id,
                name=name,
                health=self.starting.health,
                power=self.starting.power,
                money=self.starting.money,
            )
            db.add(character)
            try:
                await db.flush()
            except IntegrityError:
                raise ConflictError(f"Character name '{name}' is already taken")
            return character

        character = await self.store.run_transaction(_tx)
        logger.info(
            f"Character created: {character.name}",
            extra={"account_id": account_id, "character_id": character.id},
        )
        return character

    async def get(self, character_id: UUID) -> Character:
        async def _tx(db: AsyncSession) -> Character | None:
            return await load_character(db, character_id)

        character = await self.store.run_transaction(_tx)
        if character is None:
            raise ResourceNotFoundError(
                "Character", str(character_id),
                ErrorContext(character_id=str(character_id)),
            )
        return character

    async def delete(self, account_id: UUID, character_id: UUID) -> None:
        async def _tx(db: AsyncSession) -> None:
            character = await authorize(db, account_id, character_id)
            await db.delete(character)

        await self.store.run_transaction(_tx)
        logger.info(
            f"Character deleted: {character_id}",
            extra={"account_id": account_id, "character_id": character_id},
        )
