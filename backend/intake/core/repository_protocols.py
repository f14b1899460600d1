"""Boundary Protocols — contracts between core/services and infrastructure.

Invariants:
    - Services NEVER import a concrete backend or transport — only these Protocols
    - RecordBackend.read returns None for a never-written collection (not an error)
    - Backends and transports raise StorageBackendError / NotificationDeliveryError,
      never library-specific exceptions

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO; the core functions that shape
      records stay synchronous
"""

from typing import Protocol

from intake.core.domain_types import Record
from intake.core.format_notification import NotificationContent


class RecordBackend(Protocol):
    """Contract for collection persistence — file or remote key/value."""
    label: str

    async def read(self, collection: str) -> list[Record] | None: ...
    async def write(self, collection: str, records: list[Record]) -> None: ...


class MailTransport(Protocol):
    """Contract for outbound e-mail delivery."""
    async def send(
        self, content: NotificationContent, sender: str, recipient: str,
    ) -> None: ...
