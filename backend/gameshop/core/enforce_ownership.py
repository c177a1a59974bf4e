"""Ownership Enforcement: pure checks behind the access guard.

Invariants:
    - A missing character is NotFound, a foreign one is Forbidden; never the reverse
    - Checks raise before any mutation and have no side effects
"""

from uuid import UUID

from gameshop.core.errors import ErrorContext, ForbiddenError, ResourceNotFoundError
from gameshop.core.repository_protocols import CharacterLike


def check_ownership(
    character: CharacterLike | None, character_id: UUID, account_id: UUID,
) -> CharacterLike:
    """Return the character if it exists and belongs to account_id."""
    if character is None:
        raise ResourceNotFoundError(
            "Character", str(character_id),
            ErrorContext(account_id=str(account_id), character_id=str(character_id)),
        )
    if character.account_id != account_id:
        raise ForbiddenError(
            str(character_id), ErrorContext(account_id=str(account_id)),
        )
    return character


def is_owner(character: CharacterLike, account_id: UUID | None) -> bool:
    return account_id is not None and character.account_id == account_id
