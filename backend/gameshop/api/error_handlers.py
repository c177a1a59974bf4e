"""Error Handlers: map exceptions to the {"error": {...}} response envelope.

Invariants:
    - GameShopError -> its own http_status and to_response() body
    - UnauthenticatedError responses also expire the auth cookie
    - RequestValidationError -> 400 VALIDATION_ERROR with per-field details
    - Any other exception -> 500 INTERNAL_ERROR; the message never reaches the client
    - 5xx is logged at error level, everything else at warning
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from gameshop.config import get_settings
from gameshop.core.errors import (
    ErrorCategory,
    ErrorKind,
    ErrorSeverity,
    GameShopError,
    UnauthenticatedError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GameShopError, handle_gameshop_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_gameshop_error(request: Request, exc: GameShopError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{exc.code} on {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code, "path": request.url.path,
            "account_id": exc.context.account_id,
            "character_id": exc.context.character_id,
            "item_code": exc.context.item_code,
        },
    )
    response = JSONResponse(status_code=exc.http_status, content=exc.to_response())
    if isinstance(exc, UnauthenticatedError):
        response.delete_cookie(get_settings().auth_cookie_name)
    return response


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.warning(
        f"Rejected request body on {request.url.path}: {len(details)} error(s)",
        extra={"error_code": ErrorKind.VALIDATION.value, "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            ErrorKind.VALIDATION, "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, details=details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"error_code": ErrorKind.INTERNAL.value, "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            ErrorKind.INTERNAL, "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def _envelope(
    kind: ErrorKind, message: str, category: ErrorCategory,
    severity: ErrorSeverity, **extra,
) -> dict:
    return {
        "error": {
            "code": kind.value,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **extra,
        },
    }
