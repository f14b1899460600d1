"""Bounded Collections — tail trimming and in-place replacement on record sequences.

Invariants:
    - trim_to_tail keeps the most recent max_size records, in insertion order
    - replace_by_id never reorders, never changes length, never touches "id"
    - Inputs are never mutated; every helper returns a new list
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from intake.core.domain_types import Record, ReviewStatus


def trim_to_tail(records: Sequence[Record], max_size: int) -> list[Record]:
    """Bound a collection to its newest max_size entries."""
    if max_size < 1:
        raise ValueError(f"max_size must be >= 1, got {max_size}")
    return list(records[-max_size:])


def find_index(records: Sequence[Record], record_id: str) -> int | None:
    for index, record in enumerate(records):
        if record.get("id") == record_id:
            return index
    return None


def replace_by_id(
    records: Sequence[Record], record_id: str, changes: Mapping[str, Any],
) -> list[Record] | None:
    """Return a copy with changes merged into the matching record, or None if absent."""
    index = find_index(records, record_id)
    if index is None:
        return None
    patched = {**records[index], **changes, "id": records[index]["id"]}
    return [*records[:index], patched, *records[index + 1:]]


def approved_only(reviews: Iterable[Record]) -> list[Record]:
    """Public view of reviews: anything not approved is invisible."""
    return [r for r in reviews if r.get("status") == ReviewStatus.APPROVED.value]
