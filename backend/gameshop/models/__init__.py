"""ORM Models: SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Character is the aggregate root of the economy; inventory and equipped rows
      are scoped by character_id and cascade with it

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from gameshop.models.account import Account  # noqa: F401
from gameshop.models.character import Character  # noqa: F401
from gameshop.models.item import Item  # noqa: F401
from gameshop.models.inventory_entry import InventoryEntry  # noqa: F401
from gameshop.models.equipped_entry import EquippedEntry  # noqa: F401
