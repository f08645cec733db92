"""Infrastructure Layer: database, security primitives and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Library exceptions (SQLAlchemy, PyJWT, argon2) mapped to core/errors.py types

Design Decisions:
    - Thin wrappers over raw clients, one concern per module
"""
