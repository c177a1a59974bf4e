"""Character Routes: create, read and delete characters.

Invariants:
    - All endpoints require an authenticated account
    - Delete is owner-only (access guard inside CharacterService)
    - Read exposes money to the owner only
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from gameshop.api.deps import get_character_service, get_current_account
from gameshop.core.format_responses import format_character
from gameshop.schemas.character import CharacterCreate, CharacterCreated, CharacterView
from gameshop.services.account_service import AccountInfo
from gameshop.services.character_service import CharacterService

router = APIRouter(prefix="/api/v1/characters", tags=["characters"])


@router.post(
    "", response_model=CharacterCreated,
    status_code=status.HTTP_201_CREATED,
)
async def create_character(
    body: CharacterCreate,
    account: AccountInfo = Depends(get_current_account),
    characters: CharacterService = Depends(get_character_service),
):
    character = await characters.create(account.account_id, body.name)
    return CharacterCreated(id=character.id)


@router.get(
    "/{character_id}", response_model=CharacterView,
    response_model_exclude_none=True,
)
async def get_character(
    character_id: UUID,
    account: AccountInfo = Depends(get_current_account),
    characters: CharacterService = Depends(get_character_service),
):
    character = await characters.get(character_id)
    return format_character(character, account.account_id)


@router.delete("/{character_id}")
async def delete_character(
    character_id: UUID,
    account: AccountInfo = Depends(get_current_account),
    characters: CharacterService = Depends(get_character_service),
):
    await characters.delete(account.account_id, character_id)
    return {"message": "Character deleted"}
