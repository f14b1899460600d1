"""Core Layer — pure domain logic, no IO, no async, no network.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - All functions are pure and deterministic (ids and clocks are passed in)

Design Decisions:
    - Functional core separated from imperative shell: validation and trimming
      are testable without a backend or an event loop
"""
