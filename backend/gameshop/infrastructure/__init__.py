"""Infrastructure Layer: database sessions, token signing, password hashing, logging.

Invariants:
    - Third-party IO libraries are only imported from this layer and services/
    - Library exceptions are mapped to GameShopError subclasses before leaving
"""
