"""File Backend — one pretty-printed JSON array per collection on local disk.

Invariants:
    - Missing file → None (collection never written), not an error
    - Writes go to a temp file then atomically replace the target: a crash never
      leaves a half-written array behind
    - OSError / JSON decode errors, non-array content and non-object entries mapped to
      StorageBackendError

Design Decisions:
    - aiofiles over blocking open(): store calls suspend the request, not the event loop
    - Data dir created lazily on first use: serverless /tmp may be wiped between cold starts
"""

import json
from pathlib import Path

import aiofiles
import aiofiles.os

from intake.core.domain_types import Record
from intake.core.errors import ErrorContext, StorageBackendError


class FileBackend:
    """Persist each collection as <data_dir>/<collection>.json."""

    label = "File system"

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

    def path_for(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    async def read(self, collection: str) -> list[Record] | None:
        path = self.path_for(collection)
        try:
            await aiofiles.os.makedirs(self.data_dir, exist_ok=True)
            async with aiofiles.open(path, mode="r", encoding="utf-8") as fh:
                content = await fh.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageBackendError(
                str(e), "read", ErrorContext(collection=collection, backend=self.label),
            ) from e
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise StorageBackendError(
                f"{path.name} is not valid JSON", "read",
                ErrorContext(collection=collection, backend=self.label),
            ) from e
        if not isinstance(data, list):
            raise StorageBackendError(
                f"{path.name} does not hold a JSON array", "read",
                ErrorContext(collection=collection, backend=self.label),
            )
        if not all(isinstance(record, dict) for record in data):
            raise StorageBackendError(
                f"{path.name} holds entries that are not JSON objects", "read",
                ErrorContext(collection=collection, backend=self.label),
            )
        return data

    async def write(self, collection: str, records: list[Record]) -> None:
        path = self.path_for(collection)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            await aiofiles.os.makedirs(self.data_dir, exist_ok=True)
            async with aiofiles.open(tmp_path, mode="w", encoding="utf-8") as fh:
                await fh.write(json.dumps(records, indent=2, ensure_ascii=False))
            await aiofiles.os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            raise StorageBackendError(
                str(e), "write", ErrorContext(collection=collection, backend=self.label),
            ) from e
