"""Route Dependencies — service lookup, payload parsing, rate limits, shared secrets.

Invariants:
    - Services come from request.app.state.services (built once by create_app)
    - Payloads accepted as JSON objects or HTML form posts; anything else is a 400
    - Secrets compared in constant time; an unset secret never matches
"""

import hmac
import json
import logging
from typing import Any

from fastapi import Request

from intake.core.errors import MalformedPayloadError, RateLimitedError, UnauthorizedError
from intake.infrastructure.rate_limit import SlidingWindowRateLimiter
from intake.services.container import IntakeServices

logger = logging.getLogger(__name__)

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_services(request: Request) -> IntakeServices:
    return request.app.state.services


def client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def read_payload(request: Request) -> dict[str, Any]:
    """Request body as a flat dict, from JSON or form encoding."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}
    body = await request.body()
    if not body.strip():
        return {}
    try:
        data = json.loads(body)
    except ValueError:
        raise MalformedPayloadError()
    if not isinstance(data, dict):
        raise MalformedPayloadError()
    return data


def _enforce(limiter: SlidingWindowRateLimiter, request: Request) -> None:
    retry_after = limiter.hit(client_key(request))
    if retry_after is not None:
        logger.warning(
            "Rate limit exceeded",
            extra={"client": client_key(request), "path": request.url.path},
        )
        raise RateLimitedError(limiter.message, int(retry_after) + 1)


def enforce_api_rate_limit(request: Request) -> None:
    _enforce(get_services(request).api_limiter, request)


def enforce_test_email_rate_limit(request: Request) -> None:
    _enforce(get_services(request).test_email_limiter, request)


def secret_matches(expected: str | None, provided: Any) -> bool:
    if not expected or not isinstance(provided, str):
        return False
    return hmac.compare_digest(expected.encode(), provided.encode())


def require_admin_key(request: Request) -> None:
    """Gate the admin listing when ADMIN_KEY is configured; open otherwise."""
    expected = get_services(request).settings.admin_key
    if not expected:
        return
    if not secret_matches(expected, request.headers.get("x-admin-key")):
        raise UnauthorizedError()
