"""Ownership Enforcement: NotFound vs Forbidden, and the owner predicate."""

from types import SimpleNamespace
from uuid import uuid4

import pytest

from gameshop.core.enforce_ownership import check_ownership, is_owner
from gameshop.core.errors import ErrorKind, ForbiddenError, ResourceNotFoundError


def _character(account_id):
    return SimpleNamespace(
        id=uuid4(), account_id=account_id, name="Hero",
        health=500, power=100, money=10_000,
    )


def test_owner_passes_and_gets_character_back():
    account_id = uuid4()
    character = _character(account_id)
    assert check_ownership(character, character.id, account_id) is character


def test_missing_character_is_not_found():
    character_id = uuid4()
    with pytest.raises(ResourceNotFoundError) as exc_info:
        check_ownership(None, character_id, uuid4())
    assert exc_info.value.kind == ErrorKind.NOT_FOUND
    assert exc_info.value.context.character_id == str(character_id)


def test_foreign_character_is_forbidden():
    character = _character(uuid4())
    with pytest.raises(ForbiddenError) as exc_info:
        check_ownership(character, character.id, uuid4())
    assert exc_info.value.kind == ErrorKind.FORBIDDEN
    assert exc_info.value.http_status == 403


def test_is_owner():
    account_id = uuid4()
    character = _character(account_id)
    assert is_owner(character, account_id)
    assert not is_owner(character, uuid4())
    assert not is_owner(character, None)
