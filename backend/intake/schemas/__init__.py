"""Pydantic Schemas — request/response contracts for the public JSON API.

Invariants:
    - Schemas parse at the system boundary; acceptance rules live in core/

Design Decisions:
    - Separate from stored records: schemas are API contracts, records are plain dicts
"""
