"""Test E-mail Trigger — key-gated operator check of the mail transport.

Invariants:
    - Wrong or missing key → 403 "Unauthorized", even when TEST_EMAIL_KEY is unset
    - No transport → 200 {success: false, "Email not configured"}
    - Transport failure → 500 "Failed to send test email", details only in the log
    - Rate limited by both the API group budget and its own 5/hour budget
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from intake.api.dependencies import (
    enforce_api_rate_limit, enforce_test_email_rate_limit, get_services,
    read_payload, secret_matches,
)
from intake.core.errors import NotificationDeliveryError, OperationFailedError, UnauthorizedError
from intake.schemas.submission import EmailCheckTrigger, SubmissionResponse
from intake.services.container import IntakeServices

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/test-email", tags=["operations"],
    dependencies=[Depends(enforce_api_rate_limit)],
)


@router.post(
    "", response_model=SubmissionResponse,
    dependencies=[Depends(enforce_test_email_rate_limit)],
)
async def send_test_email(
    payload: dict[str, Any] = Depends(read_payload),
    services: IntakeServices = Depends(get_services),
):
    trigger = EmailCheckTrigger.model_validate(payload)
    if not secret_matches(services.settings.test_email_key, trigger.key):
        raise UnauthorizedError()

    try:
        sent = await services.notifier.send_test_message()
    except NotificationDeliveryError as e:
        logger.error(f"Error sending test email: {e.message}", extra={"error_code": e.code})
        raise OperationFailedError("Failed to send test email")

    if not sent:
        return SubmissionResponse(success=False, message="Email not configured")
    return SubmissionResponse(success=True, message="Test email sent successfully")
