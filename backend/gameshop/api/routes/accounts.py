"""Account Routes: sign-up and sign-in.

Invariants:
    - Sign-in sets the auth cookie ("Bearer <token>") and returns the token in the body
    - Validation rules live in schemas/account.py
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from gameshop.api.deps import get_account_service
from gameshop.config import Settings, get_settings
from gameshop.infrastructure.token_verifier import BEARER_SCHEME
from gameshop.schemas.account import (
    SignInRequest,
    SignUpRequest,
    SignUpResponse,
    TokenResponse,
)
from gameshop.services.account_service import AccountService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/accounts", tags=["accounts"])


@router.post(
    "/sign-up", response_model=SignUpResponse,
    status_code=status.HTTP_201_CREATED,
)
async def sign_up(
    body: SignUpRequest,
    accounts: AccountService = Depends(get_account_service),
):
    """Register a new account."""
    info = await accounts.sign_up(body.login, body.password, body.name)
    return SignUpResponse(
        account_id=info.account_id, login=info.login, name=info.name,
    )


@router.post("/sign-in", response_model=TokenResponse)
async def sign_in(
    body: SignInRequest,
    response: Response,
    accounts: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
):
    """Exchange login/password for an access token."""
    token = await accounts.sign_in(body.login, body.password)
    response.set_cookie(
        settings.auth_cookie_name, f"{BEARER_SCHEME} {token}",
        httponly=True, samesite="lax",
    )
    return TokenResponse(access_token=token, token_type=BEARER_SCHEME)
