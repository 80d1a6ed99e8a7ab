"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure imports only errors/types from core/, never store or coordinator logic
    - All SQLAlchemy errors leave this layer as HrRecordsError subclasses

Design Decisions:
    - Repositories implement the Protocols in core/repository_protocols.py
      (ADR: stores depend on contracts, not on SQLAlchemy)
"""
