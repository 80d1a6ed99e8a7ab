"""Services Layer — Employee Store, Project Store, Assignment Coordinator, code sequence.

Invariants:
    - Services talk to persistence only through core/repository_protocols
    - Every rule check runs before the write it guards

Design Decisions:
    - One class per component for locality (ADR: no god objects)
"""
