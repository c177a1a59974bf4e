"""Services Layer: imperative shell around the pure core.

Invariants:
    - Every mutating operation runs inside exactly one EntityStore transaction
    - Identity (account_id) and target (character_id) are passed explicitly;
      no request-scoped globals
"""
