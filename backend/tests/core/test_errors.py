"""Error Hierarchy: tagged kinds, HTTP statuses and the REST envelope."""

import pytest

from gameshop.core.errors import (
    AlreadyEquippedError,
    ConflictError,
    ErrorKind,
    ForbiddenError,
    GameShopError,
    InsufficientFundsError,
    InvalidCredentialsError,
    InventoryMissingError,
    ItemEquippedError,
    NotEquippedError,
    ResourceNotFoundError,
    StoreUnavailableError,
    TokenExpiredError,
    TokenInvalidError,
    TokenMalformedError,
    TokenMissingError,
    UnauthenticatedError,
)


@pytest.mark.parametrize("error, kind, status", [
    (UnauthenticatedError(), ErrorKind.UNAUTHENTICATED, 401),
    (ForbiddenError("c1"), ErrorKind.FORBIDDEN, 403),
    (ResourceNotFoundError("Item", "AXE"), ErrorKind.NOT_FOUND, 404),
    (InsufficientFundsError(10, 5), ErrorKind.INSUFFICIENT_FUNDS, 400),
    (InventoryMissingError("SWORD"), ErrorKind.INVENTORY_MISSING, 400),
    (ItemEquippedError("SWORD"), ErrorKind.ITEM_EQUIPPED, 400),
    (AlreadyEquippedError("SWORD"), ErrorKind.ALREADY_EQUIPPED, 400),
    (NotEquippedError("SWORD"), ErrorKind.NOT_EQUIPPED, 400),
    (ConflictError("taken"), ErrorKind.CONFLICT, 409),
    (StoreUnavailableError("boom", "commit"), ErrorKind.STORE_UNAVAILABLE, 503),
])
def test_each_error_has_distinct_kind_and_status(error, kind, status):
    assert isinstance(error, GameShopError)
    assert error.kind == kind
    assert error.code == kind.value
    assert error.http_status == status


@pytest.mark.parametrize("error, reason", [
    (TokenMissingError(), "token_missing"),
    (TokenExpiredError(), "token_expired"),
    (TokenMalformedError(), "token_malformed"),
    (TokenInvalidError(), "token_invalid"),
    (InvalidCredentialsError(), "invalid_credentials"),
])
def test_token_errors_are_unauthenticated_with_reason(error, reason):
    assert isinstance(error, UnauthenticatedError)
    assert error.kind == ErrorKind.UNAUTHENTICATED
    assert error.context.reason == reason


def test_to_response_envelope():
    body = ItemEquippedError("SWORD").to_response()
    assert body["error"]["code"] == "ITEM_EQUIPPED"
    assert body["error"]["category"] == "business_rule"
    assert body["error"]["severity"] == "error"
    assert body["error"]["context"]["item_code"] == "SWORD"
    assert "timestamp" in body["error"]


def test_store_error_message_does_not_include_driver_details():
    error = StoreUnavailableError("Connection or operational error", "execute")
    assert error.message == "Database execute failed: Connection or operational error"
