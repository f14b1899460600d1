"""Reviews — public submission and the approved-only public listing."""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from intake.api.dependencies import enforce_api_rate_limit, get_services, read_payload
from intake.core.errors import IntakeError, OperationFailedError
from intake.schemas.submission import ReviewListResponse, ReviewSubmission, SubmissionResponse
from intake.services.container import IntakeServices

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/reviews", tags=["reviews"],
    dependencies=[Depends(enforce_api_rate_limit)],
)

ACCEPTED_MESSAGE = "Thank you for your review! It will be published after approval."
SUBMIT_FAILED_MESSAGE = (
    "An error occurred while submitting your review. Please try again later."
)
LIST_FAILED_MESSAGE = "Error fetching reviews"


@router.get("", response_model=ReviewListResponse)
async def list_reviews(services: IntakeServices = Depends(get_services)):
    try:
        reviews = await services.submissions.list_public_reviews()
    except Exception as e:
        logger.error(f"Error fetching reviews: {e}", exc_info=True)
        raise OperationFailedError(LIST_FAILED_MESSAGE)
    return ReviewListResponse(reviews=reviews, count=len(reviews))


@router.post("", response_model=SubmissionResponse)
async def submit_review(
    payload: dict[str, Any] = Depends(read_payload),
    services: IntakeServices = Depends(get_services),
):
    submission = ReviewSubmission.model_validate(payload)
    try:
        await services.submissions.submit_review(submission.model_dump())
    except IntakeError:
        raise
    except Exception as e:
        logger.error(f"Error submitting review: {e}", exc_info=True)
        raise OperationFailedError(SUBMIT_FAILED_MESSAGE)
    return SubmissionResponse(success=True, message=ACCEPTED_MESSAGE)
