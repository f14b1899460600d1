"""Remote Key/Value Backend — Vercel KV / Upstash REST protocol over httpx.

Invariants:
    - One key per collection: "<prefix>:<collection>"
    - Value stored as JSON text of the record list; a pre-decoded list is accepted on read
    - Missing key ({"result": null}) → None, not an error
    - Transport errors, non-2xx statuses, {"error": ...} bodies and non-list values
      and lists holding non-object entries all mapped to StorageBackendError

Design Decisions:
    - Raw REST commands over a vendor SDK: two commands (GET/SET) do not justify
      another dependency; httpx is already the HTTP client of the stack
    - Client injected transport: tests drive the backend with httpx.MockTransport
"""

import json
from typing import Any

import httpx

from intake.core.domain_types import Record
from intake.core.errors import ErrorContext, StorageBackendError


class KVBackend:
    """Persist each collection under a single key of a REST key/value service."""

    label = "Vercel KV"

    def __init__(
        self,
        rest_url: str,
        token: str,
        prefix: str = "prod",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.prefix = prefix
        self.client = httpx.AsyncClient(
            base_url=rest_url.rstrip("/"),
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout_seconds,
            transport=transport,
        )

    def key_for(self, collection: str) -> str:
        return f"{self.prefix}:{collection}"

    async def _command(self, collection: str, operation: str, *args: str) -> Any:
        context = ErrorContext(collection=collection, backend=self.label)
        try:
            response = await self.client.post("/", json=list(args))
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            raise StorageBackendError(
                f"HTTP {e.response.status_code}", operation, context,
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise StorageBackendError(str(e) or type(e).__name__, operation, context) from e
        if not isinstance(body, dict) or body.get("error"):
            detail = body.get("error") if isinstance(body, dict) else "unexpected response"
            raise StorageBackendError(str(detail), operation, context)
        return body.get("result")

    async def read(self, collection: str) -> list[Record] | None:
        result = await self._command(collection, "read", "GET", self.key_for(collection))
        if result is None:
            return None
        if isinstance(result, str):
            try:
                result = json.loads(result)
            except json.JSONDecodeError as e:
                raise StorageBackendError(
                    "stored value is not valid JSON", "read",
                    ErrorContext(collection=collection, backend=self.label),
                ) from e
        if not isinstance(result, list):
            raise StorageBackendError(
                "stored value is not a list", "read",
                ErrorContext(collection=collection, backend=self.label),
            )
        if not all(isinstance(record, dict) for record in result):
            raise StorageBackendError(
                "stored list holds entries that are not objects", "read",
                ErrorContext(collection=collection, backend=self.label),
            )
        return result

    async def write(self, collection: str, records: list[Record]) -> None:
        try:
            payload = json.dumps(records, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageBackendError(
                str(e), "write", ErrorContext(collection=collection, backend=self.label),
            ) from e
        await self._command(collection, "write", "SET", self.key_for(collection), payload)

    async def aclose(self) -> None:
        await self.client.aclose()
