"""Submission Schemas — Pydantic models for the public JSON API.

Invariants:
    - Inbound models never reject a field by type: the core validator owns every
      acceptance rule and its exact 400 message
    - Unknown inbound fields are ignored
    - Outbound envelopes always carry "success"

Design Decisions:
    - Any-typed inbound fields over str/int: a rating of "abc" must produce the
      domain message "Rating must be between 1 and 5.", not a Pydantic error list
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class QuoteRequestSubmission(BaseModel):
    """Quote request form. name/email/phone required, checked by the validator."""
    model_config = ConfigDict(extra="ignore")

    name: Any = None
    email: Any = None
    phone: Any = None
    address: Any = None
    service: Any = None
    message: Any = None
    honeypot: Any = None


class ReviewSubmission(BaseModel):
    """Review form. name/rating/message required, checked by the validator."""
    model_config = ConfigDict(extra="ignore")

    name: Any = None
    city: Any = None
    rating: Any = None
    message: Any = None
    honeypot: Any = None


class EmailCheckTrigger(BaseModel):
    model_config = ConfigDict(extra="ignore")

    key: Any = None


class SubmissionResponse(BaseModel):
    success: bool
    message: str


class QuoteRequestListResponse(BaseModel):
    success: bool = True
    requests: list[dict[str, Any]]
    count: int


class ReviewListResponse(BaseModel):
    success: bool = True
    reviews: list[dict[str, Any]]
    count: int


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    env: str
    storage: str
    email: str
