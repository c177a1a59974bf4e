"""Access Guard: loads a character inside the caller's transaction and checks ownership.

Invariants:
    - Called first by every economy operation and character mutation
    - Missing character -> ResourceNotFoundError, foreign character -> ForbiddenError
    - for_update=True locks the character row until the transaction ends
      (SELECT ... FOR UPDATE; a no-op on SQLite, where BEGIN IMMEDIATE already serializes)
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gameshop.core.enforce_ownership import check_ownership
from gameshop.models.character import Character


async def load_character(
    db: AsyncSession, character_id: UUID, *, for_update: bool = False,
) -> Character | None:
    query = select(Character).where(Character.id == character_id)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def authorize(
    db: AsyncSession,
    account_id: UUID,
    character_id: UUID,
    *,
    for_update: bool = True,
) -> Character:
    """Return the character owned by account_id or raise."""
    character = await load_character(db, character_id, for_update=for_update)
    return check_ownership(character, character_id, account_id)
