"""Account Service: sign-up, sign-in and token-to-account resolution.

Invariants:
    - Passwords are stored only as bcrypt hashes
    - Sign-in failure never reveals whether the login or the password was wrong
      to the client (both -> InvalidCredentialsError)
    - resolve_account fails with UnauthenticatedError when the token's account no
      longer exists

Design Decisions:
    - bcrypt runs in a worker thread (asyncio.to_thread): hashing is CPU-bound and
      must not stall the event loop
"""

import asyncio
import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gameshop.core.domain_types import AccountId
from gameshop.core.errors import (
    ConflictError,
    ErrorContext,
    InvalidCredentialsError,
    UnauthenticatedError,
)
from gameshop.core.repository_protocols import EntityStore
from gameshop.infrastructure.passwords import hash_password, verify_password
from gameshop.infrastructure.token_verifier import TokenVerifier
from gameshop.models.account import Account

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountInfo:
    account_id: AccountId
    login: str
    name: str


class AccountService:
    """Account registration and authentication."""

    def __init__(self, store: EntityStore, tokens: TokenVerifier, bcrypt_rounds: int = 10):
        self.store = store
        self.tokens = tokens
        self.bcrypt_rounds = bcrypt_rounds

    async def sign_up(self, login: str, password: str, name: str) -> AccountInfo:
        password_hash = await asyncio.to_thread(
            hash_password, password, self.bcrypt_rounds,
        )

        async def _tx(db: AsyncSession) -> AccountInfo:
            if await _find_by_login(db, login) is not None:
                raise ConflictError(f"Login '{login}' is already taken")
            account = Account(login=login, password_hash=password_hash, name=name)
            db.add(account)
            try:
                await db.flush()
            except IntegrityError:
                raise ConflictError(f"Login '{login}' is already taken")
            return AccountInfo(AccountId(account.id), account.login, account.name)

        info = await self.store.run_transaction(_tx)
        logger.info(
            f"Account registered: {info.login}",
            extra={"account_id": info.account_id},
        )
        return info

    async def sign_in(self, login: str, password: str) -> str:
        """Verify credentials and return a signed access token."""

        async def _tx(db: AsyncSession) -> Account | None:
            return await _find_by_login(db, login)

        account = await self.store.run_transaction(_tx)
        if account is None:
            raise InvalidCredentialsError()
        if not await asyncio.to_thread(verify_password, password, account.password_hash):
            raise InvalidCredentialsError(ErrorContext(account_id=str(account.id)))
        return self.tokens.issue(account.id)

    async def resolve_account(self, credential: str) -> AccountInfo:
        """Verify a bearer token and load the account it names."""
        account_id = self.tokens.verify(credential)

        async def _tx(db: AsyncSession) -> Account | None:
            return await db.get(Account, account_id)

        account = await self.store.run_transaction(_tx)
        if account is None:
            raise UnauthenticatedError(
                "Token account no longer exists", "account_not_found",
                ErrorContext(account_id=str(account_id)),
            )
        return AccountInfo(AccountId(account.id), account.login, account.name)


async def _find_by_login(db: AsyncSession, login: str) -> Account | None:
    result = await db.execute(select(Account).where(Account.login == login))
    return result.scalar_one_or_none()