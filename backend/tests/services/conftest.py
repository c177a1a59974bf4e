"""Service test fixtures: engines wired to the per-test store."""

import pytest

from gameshop.infrastructure.token_verifier import TokenVerifier
from gameshop.services.account_service import AccountService
from gameshop.services.character_service import CharacterService
from gameshop.services.economy_engine import EconomyEngine


@pytest.fixture
def engine(store):
    return EconomyEngine(store)


@pytest.fixture
def characters(store):
    return CharacterService(store)


@pytest.fixture
def tokens():
    return TokenVerifier("service-test-secret-with-enough-bytes", expire_minutes=5)


@pytest.fixture
def accounts(store, tokens):
    return AccountService(store, tokens, bcrypt_rounds=4)
