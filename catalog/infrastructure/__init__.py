"""Infrastructure Layer: database access and cross-cutting concerns.

Invariants:
    - Infrastructure depends on core types, never the other way round
    - SQLAlchemy exceptions are mapped to DatabaseError before leaving this layer
"""
