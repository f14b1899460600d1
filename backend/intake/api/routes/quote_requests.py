"""Quote Requests — public submission and the admin listing.

Invariants:
    - Honeypot and real submissions produce byte-identical 200 responses
    - Validation failures are 400 with the validator's message; anything else is a
      generic 500 with details only in the log
    - Listing exposes every stored field verbatim; gated only when ADMIN_KEY is set
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from intake.api.dependencies import (
    enforce_api_rate_limit, get_services, read_payload, require_admin_key,
)
from intake.core.errors import IntakeError, OperationFailedError
from intake.schemas.submission import (
    QuoteRequestListResponse, QuoteRequestSubmission, SubmissionResponse,
)
from intake.services.container import IntakeServices

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/requests", tags=["requests"],
    dependencies=[Depends(enforce_api_rate_limit)],
)

ACCEPTED_MESSAGE = "Quote request submitted successfully! We will contact you soon."
SUBMIT_FAILED_MESSAGE = (
    "An error occurred while submitting your request. Please try again later."
)
LIST_FAILED_MESSAGE = "Error fetching requests"


@router.post("", response_model=SubmissionResponse)
async def submit_quote_request(
    payload: dict[str, Any] = Depends(read_payload),
    services: IntakeServices = Depends(get_services),
):
    """Store a quote request and notify the operator."""
    submission = QuoteRequestSubmission.model_validate(payload)
    try:
        await services.submissions.submit_quote_request(submission.model_dump())
    except IntakeError:
        raise
    except Exception as e:
        logger.error(f"Error processing quote request: {e}", exc_info=True)
        raise OperationFailedError(SUBMIT_FAILED_MESSAGE)
    return SubmissionResponse(success=True, message=ACCEPTED_MESSAGE)


@router.get(
    "", response_model=QuoteRequestListResponse,
    dependencies=[Depends(require_admin_key)],
)
async def list_quote_requests(services: IntakeServices = Depends(get_services)):
    try:
        requests = await services.submissions.list_quote_requests()
    except Exception as e:
        logger.error(f"Error fetching requests: {e}", exc_info=True)
        raise OperationFailedError(LIST_FAILED_MESSAGE)
    return QuoteRequestListResponse(requests=requests, count=len(requests))
