"""API Dependencies: service construction and authenticated-account resolution.

Invariants:
    - Services are built per request from the store singleton and settings;
      they hold no per-request state
    - The credential is read from the auth cookie first, then the Authorization header
    - Routes receive a resolved AccountInfo, never the raw token
"""

from fastapi import Depends, Request

from gameshop.config import Settings, get_settings
from gameshop.infrastructure.database import DatabaseSessionManager, get_store
from gameshop.infrastructure.token_verifier import TokenVerifier, extract_bearer
from gameshop.services.account_service import AccountInfo, AccountService
from gameshop.services.character_service import CharacterService, StartingStats
from gameshop.services.economy_engine import EconomyEngine


def get_token_verifier(settings: Settings = Depends(get_settings)) -> TokenVerifier:
    return TokenVerifier(
        settings.jwt_secret, settings.jwt_algorithm, settings.jwt_expire_minutes,
    )


def get_account_service(
    store: DatabaseSessionManager = Depends(get_store),
    tokens: TokenVerifier = Depends(get_token_verifier),
    settings: Settings = Depends(get_settings),
) -> AccountService:
    return AccountService(store, tokens, settings.bcrypt_rounds)


def get_character_service(
    store: DatabaseSessionManager = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> CharacterService:
    return CharacterService(
        store,
        StartingStats(
            health=settings.starting_health,
            power=settings.starting_power,
            money=settings.starting_money,
        ),
    )


def get_economy_engine(
    store: DatabaseSessionManager = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> EconomyEngine:
    return EconomyEngine(store, earn_amount=settings.earn_money_amount)


async def get_current_account(
    request: Request,
    accounts: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
) -> AccountInfo:
    raw = request.cookies.get(settings.auth_cookie_name)
    if not raw:
        raw = request.headers.get("Authorization")
    return await accounts.resolve_account(extract_bearer(raw))
