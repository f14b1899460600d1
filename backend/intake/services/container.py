"""Service Container — configuration-derived service objects built once per app.

Invariants:
    - Backend and mail transport are chosen exactly once from Settings and never swapped
    - Routes receive services from app.state via dependencies — no module-level globals
    - close() releases network clients; safe to call when none were opened

Design Decisions:
    - Explicit container over singletons initialized at import: tests build an app per
      Settings instance without patching modules
"""

from dataclasses import dataclass

from intake.config import Settings
from intake.core.repository_protocols import MailTransport, RecordBackend
from intake.infrastructure.file_backend import FileBackend
from intake.infrastructure.kv_backend import KVBackend
from intake.infrastructure.mail_transport import SmtpTransport
from intake.infrastructure.rate_limit import SlidingWindowRateLimiter
from intake.infrastructure.record_store import RecordStore
from intake.services.notification_sender import NotificationSender
from intake.services.submission_service import SubmissionService

API_RATE_LIMIT_MESSAGE = "Too many requests, please try again later."
TEST_EMAIL_RATE_LIMIT_MESSAGE = "Too many test email requests."


@dataclass
class IntakeServices:
    settings: Settings
    store: RecordStore
    notifier: NotificationSender
    submissions: SubmissionService
    api_limiter: SlidingWindowRateLimiter
    test_email_limiter: SlidingWindowRateLimiter

    async def close(self) -> None:
        backend = self.store.backend
        if isinstance(backend, KVBackend):
            await backend.aclose()


def build_backend(settings: Settings) -> RecordBackend:
    if settings.kv_enabled:
        return KVBackend(
            settings.kv_rest_api_url,
            settings.kv_rest_api_token,
            prefix=settings.kv_prefix,
            timeout_seconds=settings.kv_timeout_seconds,
        )
    return FileBackend(settings.resolved_data_dir)


def build_transport(settings: Settings) -> MailTransport | None:
    if not settings.email_enabled:
        return None
    return SmtpTransport(
        settings.smtp_host,
        settings.smtp_port,
        settings.smtp_user,
        settings.smtp_pass,
        secure=settings.smtp_secure,
        timeout_seconds=settings.smtp_timeout_seconds,
    )


def build_services(
    settings: Settings,
    backend: RecordBackend | None = None,
    transport: MailTransport | None = None,
) -> IntakeServices:
    """Wire every service from settings. backend/transport override for tests."""
    store = RecordStore(backend if backend is not None else build_backend(settings))
    notifier = NotificationSender(
        transport if transport is not None else build_transport(settings),
        sender=settings.email_from,
        recipient=settings.requests_to,
        business_name=settings.business_name,
    )
    return IntakeServices(
        settings=settings,
        store=store,
        notifier=notifier,
        submissions=SubmissionService(
            store, notifier, settings.max_requests, settings.max_reviews,
        ),
        api_limiter=SlidingWindowRateLimiter(
            settings.api_rate_limit, settings.api_rate_window_seconds,
            API_RATE_LIMIT_MESSAGE,
        ),
        test_email_limiter=SlidingWindowRateLimiter(
            settings.test_email_rate_limit, settings.test_email_rate_window_seconds,
            TEST_EMAIL_RATE_LIMIT_MESSAGE,
        ),
    )
