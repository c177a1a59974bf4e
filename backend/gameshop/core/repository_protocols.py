"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - The entity store is reached only through EntityStore.run_transaction
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - The transaction callback receives the store's session object untyped here,
      so core stays free of SQLAlchemy imports
"""

from typing import Any, Awaitable, Callable, Protocol, TypeVar
from uuid import UUID

T = TypeVar("T")


class CharacterLike(Protocol):
    """Structural contract for Character objects passed to core checks and formatters."""
    id: UUID
    account_id: UUID
    name: str
    health: int
    power: int
    money: int


class EntityStore(Protocol):
    """Transactional store: fn runs inside one isolated transaction.

    The transaction commits when fn returns and rolls back when it raises.
    Store failures surface as StoreUnavailableError.
    """
    async def run_transaction(self, fn: Callable[[Any], Awaitable[T]]) -> T: ...
