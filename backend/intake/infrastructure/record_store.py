"""Record Store — bounded, ordered persistence of named collections over one backend.

Invariants:
    - load() never raises: backend failures are logged and read as an empty collection
    - save() never raises: backend failures are logged and the write is lost
    - Trimming happens at write time: the backend never holds more than max_size records
    - append/update_by_id are serialized per collection within this process

Design Decisions:
    - Error swallowing centralized here, not in each backend: both backends present
      identical semantics and raise StorageBackendError for the store to absorb
    - asyncio.Lock per collection over optimistic concurrency: write volume is tiny;
      multi-process deployments still race (last write wins), accepted limitation
    - A failed load inside append() yields [] and the following save overwrites the
      collection with the single new record: same observable behavior as a plain
      load → push → save sequence
"""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from intake.core.bounded_collection import replace_by_id, trim_to_tail
from intake.core.domain_types import Record
from intake.core.errors import StorageBackendError
from intake.core.repository_protocols import RecordBackend

logger = logging.getLogger(__name__)


class RecordStore:
    """Load/save/append/update over a RecordBackend chosen at startup."""

    def __init__(self, backend: RecordBackend):
        self.backend = backend
        self._locks: dict[str, asyncio.Lock] = {}

    @property
    def backend_label(self) -> str:
        return self.backend.label

    def _lock_for(self, collection: str) -> asyncio.Lock:
        lock = self._locks.get(collection)
        if lock is None:
            lock = self._locks[collection] = asyncio.Lock()
        return lock

    async def load(self, collection: str) -> list[Record]:
        """Full ordered collection, or [] if never written or unreadable."""
        try:
            records = await self.backend.read(collection)
        except StorageBackendError as e:
            logger.error(
                f"Failed to load collection: {e.message}",
                extra={
                    "collection": collection, "backend": self.backend_label,
                    "error_code": e.code,
                },
            )
            return []
        return list(records) if records else []

    async def save(
        self, collection: str, records: Sequence[Record], max_size: int,
    ) -> None:
        """Replace the collection with its newest max_size records."""
        trimmed = trim_to_tail(records, max_size)
        try:
            await self.backend.write(collection, trimmed)
        except StorageBackendError as e:
            logger.error(
                f"Failed to save collection: {e.message}",
                extra={
                    "collection": collection, "backend": self.backend_label,
                    "error_code": e.code,
                },
            )

    async def append(
        self, collection: str, record: Record, max_size: int,
    ) -> None:
        async with self._lock_for(collection):
            records = await self.load(collection)
            records.append(record)
            await self.save(collection, records, max_size)

    async def update_by_id(
        self,
        collection: str,
        record_id: str,
        changes: Mapping[str, Any],
        max_size: int,
    ) -> bool:
        """Read-modify-write one record. False (and no write) if the id is gone."""
        async with self._lock_for(collection):
            records = await self.load(collection)
            updated = replace_by_id(records, record_id, changes)
            if updated is None:
                logger.warning(
                    "Record not found for update",
                    extra={"collection": collection, "record_id": record_id},
                )
                return False
            await self.save(collection, updated, max_size)
            return True
