"""Core Layer — pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic
    - repository_protocols.py is the one exception: it declares the async
      repository shapes the services depend on, without implementing them

Design Decisions:
    - Rules live here as plain functions over dicts; services read, call the
      rules, then write (ADR: pure rules between reads and writes)
"""
