"""Error Hierarchy: typed, tagged exceptions for every GameShop failure mode.

Invariants:
    - Every error has a kind (ErrorKind), category (ErrorCategory), severity (ErrorSeverity)
    - `code` is always `kind.value`; callers branch on kind, never on message text
    - Domain errors (400-level) are raised before any mutation; infrastructure
      errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with GameShopError base: one FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


class ErrorKind(str, Enum):
    """Stable error tags. Each maps to one HTTP status."""
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    INVENTORY_MISSING = "INVENTORY_MISSING"
    ITEM_EQUIPPED = "ITEM_EQUIPPED"
    ALREADY_EQUIPPED = "ALREADY_EQUIPPED"
    NOT_EQUIPPED = "NOT_EQUIPPED"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    CONFLICT = "CONFLICT"
    VALIDATION = "VALIDATION_ERROR"
    INTERNAL = "INTERNAL_ERROR"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    account_id: str | None = None
    character_id: str | None = None
    item_code: str | None = None
    reason: str | None = None
    debug_info: dict[str, Any] | None = None


class GameShopError(Exception):
    """Base exception for all GameShop errors."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    @property
    def code(self) -> str:
        return self.kind.value

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "character_id": self.context.character_id,
                    "item_code": self.context.item_code,
                    "reason": self.context.reason,
                },
            }
        }


# ─── Authentication (401) ───────────────────────────────────────

class UnauthenticatedError(GameShopError):
    """Missing, unreadable or rejected credential."""
    def __init__(
        self, message: str = "Authentication required",
        reason: str = "unauthenticated", context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.reason = reason
        super().__init__(
            message, ErrorKind.UNAUTHENTICATED, ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, ctx, 401,
        )


class TokenMissingError(UnauthenticatedError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Access token is missing", "token_missing", context)


class TokenExpiredError(UnauthenticatedError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Access token has expired", "token_expired", context)


class TokenMalformedError(UnauthenticatedError):
    def __init__(self, detail: str = "Access token is malformed", context: ErrorContext | None = None):
        super().__init__(detail, "token_malformed", context)


class TokenInvalidError(UnauthenticatedError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Access token was rejected", "token_invalid", context)


class InvalidCredentialsError(UnauthenticatedError):
    """Unknown login or wrong password on sign-in."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Invalid login or password", "invalid_credentials", context)


# ─── Domain Errors (400-level) ──────────────────────────────────

class ForbiddenError(GameShopError):
    """Character is not owned by the authenticated account."""
    def __init__(self, character_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.character_id = character_id
        super().__init__(
            "Character does not belong to the authenticated account",
            ErrorKind.FORBIDDEN, ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, ctx, 403,
        )


class ResourceNotFoundError(GameShopError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            ErrorKind.NOT_FOUND, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class InsufficientFundsError(GameShopError):
    """Purchase total exceeds the character's balance."""
    def __init__(self, required: int, available: int, context: ErrorContext | None = None):
        super().__init__(
            f"Not enough money: {required} required, {available} available",
            ErrorKind.INSUFFICIENT_FUNDS, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.required = required
        self.available = available


class InventoryMissingError(GameShopError):
    """No free inventory unit for the item code."""
    def __init__(self, item_code: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.item_code = item_code
        super().__init__(
            f"Item '{item_code}' is not in the inventory",
            ErrorKind.INVENTORY_MISSING, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 400,
        )


class ItemEquippedError(GameShopError):
    """Sale attempted on an item code that is currently equipped."""
    def __init__(self, item_code: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.item_code = item_code
        super().__init__(
            f"Item '{item_code}' is equipped and cannot be sold",
            ErrorKind.ITEM_EQUIPPED, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 400,
        )


class AlreadyEquippedError(GameShopError):
    def __init__(self, item_code: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.item_code = item_code
        super().__init__(
            f"Item '{item_code}' is already equipped",
            ErrorKind.ALREADY_EQUIPPED, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 400,
        )


class NotEquippedError(GameShopError):
    def __init__(self, item_code: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.item_code = item_code
        super().__init__(
            f"Item '{item_code}' is not equipped",
            ErrorKind.NOT_EQUIPPED, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 400,
        )


class ConflictError(GameShopError):
    """Unique value (login, character name) already taken."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, ErrorKind.CONFLICT, ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class ValidationError(GameShopError):
    """Input rejected by a domain rule outside pydantic's reach."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, ErrorKind.VALIDATION, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreUnavailableError(GameShopError):
    """Transaction failed in the store (conflict, connectivity, constraint)."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            ErrorKind.STORE_UNAVAILABLE, ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
