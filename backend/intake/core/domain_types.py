"""Domain Types — enums and aliases that replace bare strings across the codebase.

Invariants:
    - RecordId is an opaque string, unique within its collection
    - All valid states encoded as Enums — no raw string matching in services
    - Record is the JSON shape persisted by every backend

Design Decisions:
    - NewType over dataclass wrappers: records stay plain dicts so both backends
      round-trip them unchanged
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import Any, NewType


RecordId = NewType("RecordId", str)
Record = dict[str, Any]


class Collection(str, Enum):
    """Named, size-bounded collections. Value is the storage name."""
    REQUESTS = "requests"
    REVIEWS = "reviews"


class EmailStatus(str, Enum):
    """Notification outcome recorded on a quote request."""
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"


class ReviewStatus(str, Enum):
    """Moderation state. Only APPROVED is publicly listed."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
