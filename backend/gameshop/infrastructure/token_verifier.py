"""Token Verifier: issues and verifies signed bearer tokens (PyJWT).

Invariants:
    - verify() returns an AccountId or raises an UnauthenticatedError subtype;
      raw credentials never reach services/
    - Expired -> TokenExpiredError, undecodable or missing subject -> TokenMalformedError,
      bad signature or any other rejection -> TokenInvalidError
    - Tokens carry sub (account UUID), iat and exp

Design Decisions:
    - Credential transport is "Bearer <jwt>", read from a cookie or the Authorization header
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from gameshop.core.domain_types import AccountId
from gameshop.core.errors import (
    TokenExpiredError,
    TokenInvalidError,
    TokenMalformedError,
    TokenMissingError,
)

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"


def extract_bearer(raw: str | None) -> str:
    """Split "Bearer <token>" and return the token."""
    if not raw or not raw.strip():
        raise TokenMissingError()
    scheme, _, token = raw.strip().partition(" ")
    if scheme != BEARER_SCHEME:
        raise TokenMalformedError("Token type must be Bearer")
    if not token.strip():
        raise TokenMissingError()
    return token.strip()


class TokenVerifier:
    """HMAC-signed JWT issuing and verification."""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 1440):
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, account_id: UUID) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(account_id),
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, credential: str) -> AccountId:
        try:
            payload = jwt.decode(
                credential, self.secret, algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError()
        except jwt.InvalidSignatureError:
            raise TokenInvalidError()
        except (jwt.DecodeError, jwt.MissingRequiredClaimError):
            raise TokenMalformedError()
        except jwt.InvalidTokenError as e:
            logger.warning(f"Token rejected: {e}")
            raise TokenInvalidError()

        try:
            return AccountId(UUID(str(payload["sub"])))
        except ValueError:
            raise TokenMalformedError("Token subject is not an account id")
