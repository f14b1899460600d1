"""Submission Service — validate, persist, notify, and list intake records.

Invariants:
    - Honeypot submissions return before validation: no record, no e-mail, no log line
    - A quote request is stored with emailStatus=pending BEFORE any notification attempt
    - Notification outcome is patched onto the stored record by id (second write);
      losing that write never turns an accepted submission into a failure
    - Public review listing exposes approved reviews only

Design Decisions:
    - ids and timestamps generated here, not in core: core stays deterministic
    - Caps passed per call to the store: one store instance serves both collections
"""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from intake.core.bounded_collection import approved_only
from intake.core.domain_types import Collection, Record, RecordId, ReviewStatus
from intake.core.validate_submission import build_quote_request, build_review, is_honeypot
from intake.infrastructure.record_store import RecordStore
from intake.services.notification_sender import NotificationSender

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """ISO-8601, millisecond precision, Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_record_id() -> RecordId:
    return RecordId(str(uuid.uuid4()))


class SubmissionService:
    """Entry point for every submission and listing the HTTP surface exposes."""

    def __init__(
        self,
        store: RecordStore,
        notifier: NotificationSender,
        max_requests: int,
        max_reviews: int,
        id_factory: Callable[[], RecordId] = new_record_id,
        clock: Callable[[], str] = utc_timestamp,
    ):
        self.store = store
        self.notifier = notifier
        self.max_requests = max_requests
        self.max_reviews = max_reviews
        self._id_factory = id_factory
        self._clock = clock

    async def submit_quote_request(self, fields: dict[str, Any]) -> Record | None:
        """Store and notify. Returns the stored record, or None for a discarded honeypot."""
        if is_honeypot(fields.get("honeypot")):
            return None
        record = build_quote_request(fields, self._id_factory(), self._clock())
        await self.store.append(Collection.REQUESTS.value, record, self.max_requests)

        status = await self.notifier.notify_quote_request(record)
        record = {**record, "emailStatus": status.value}
        await self.store.update_by_id(
            Collection.REQUESTS.value, record["id"],
            {"emailStatus": status.value}, self.max_requests,
        )
        logger.info(
            "Quote request received",
            extra={
                "collection": Collection.REQUESTS.value,
                "record_id": record["id"], "email_status": status.value,
            },
        )
        return record

    async def submit_review(self, fields: dict[str, Any]) -> Record | None:
        """Store a pending review. Returns it, or None for a discarded honeypot."""
        if is_honeypot(fields.get("honeypot")):
            return None
        record = build_review(fields, self._id_factory(), self._clock())
        await self.store.append(Collection.REVIEWS.value, record, self.max_reviews)
        logger.info(
            "Review submitted",
            extra={"collection": Collection.REVIEWS.value, "record_id": record["id"]},
        )
        return record

    async def list_quote_requests(self) -> list[Record]:
        return await self.store.load(Collection.REQUESTS.value)

    async def list_public_reviews(self) -> list[Record]:
        return approved_only(await self.store.load(Collection.REVIEWS.value))

    async def set_review_status(self, record_id: str, status: ReviewStatus) -> bool:
        """Apply a moderation decision. Moderation has no HTTP route."""
        return await self.store.update_by_id(
            Collection.REVIEWS.value, record_id, {"status": status.value}, self.max_reviews,
        )

