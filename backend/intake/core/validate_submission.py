"""Submission Validation — accept or reject raw field sets, build sanitized records.

Invariants:
    - Honeypot is checked by the caller BEFORE validation; validation never sees spam
    - Required fields and the honeypot use form-value truthiness: missing, None, "", 0,
      NaN and False are empty; anything else (empty lists and objects too) is filled
    - Rating must denote an integer in [1, 5]; out-of-range values are rejected, never clamped
    - Boolean true denotes rating 1
    - Every free-text field is escaped before it lands in a record
    - Email syntax is checked on the raw value; the stored value is escaped

Design Decisions:
    - Pure builders take record_id and timestamp as arguments: the shell owns uuid/clock
    - Raise SubmissionValidationError instead of returning error dicts: the route has
      nothing to decide, the global handler renders the 400
"""

import math
from typing import Any

from intake.core.domain_types import EmailStatus, Record, RecordId, ReviewStatus
from intake.core.errors import SubmissionValidationError
from intake.core.sanitize import escape_html, is_valid_email

MIN_RATING: int = 1
MAX_RATING: int = 5

QUOTE_REQUIRED_MESSAGE = "Name, email, and phone are required fields."
INVALID_EMAIL_MESSAGE = "Invalid email address."
REVIEW_REQUIRED_MESSAGE = "Name, rating, and message are required."
INVALID_RATING_MESSAGE = f"Rating must be between {MIN_RATING} and {MAX_RATING}."


def is_filled(value: Any) -> bool:
    """Form-value truthiness: only None, False, "", 0 and NaN count as empty."""
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def is_honeypot(value: Any) -> bool:
    """A filled hidden field marks the submission as automated."""
    return is_filled(value)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return escape_html(value if isinstance(value, str) else str(value))


def parse_rating(value: Any) -> int | None:
    """Return the integral rating denoted by value, or None if it denotes none."""
    if isinstance(value, int):
        return int(value)
    if isinstance(value, str):
        value = value.strip()
        try:
            return int(value)
        except ValueError:
            pass
        try:
            value = float(value)
        except ValueError:
            return None
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
    return None


def build_quote_request(
    fields: dict[str, Any], record_id: RecordId, timestamp: str,
) -> Record:
    """Validate a quote request field set and return the record to store."""
    name, email, phone = fields.get("name"), fields.get("email"), fields.get("phone")
    if not (is_filled(name) and is_filled(email) and is_filled(phone)):
        missing = next(
            k for k, v in (("name", name), ("email", email), ("phone", phone))
            if not is_filled(v)
        )
        raise SubmissionValidationError(QUOTE_REQUIRED_MESSAGE, missing)

    raw_email = email if isinstance(email, str) else str(email)
    if not is_valid_email(raw_email):
        raise SubmissionValidationError(INVALID_EMAIL_MESSAGE, "email")

    return {
        "id": record_id,
        "name": _text(name),
        "email": _text(raw_email),
        "phone": _text(phone),
        "address": _text(fields.get("address") or ""),
        "service": _text(fields.get("service") or ""),
        "message": _text(fields.get("message") or ""),
        "timestamp": timestamp,
        "emailStatus": EmailStatus.PENDING.value,
    }


def build_review(
    fields: dict[str, Any], record_id: RecordId, timestamp: str,
) -> Record:
    """Validate a review field set and return the record to store."""
    name, rating, message = fields.get("name"), fields.get("rating"), fields.get("message")
    if not (is_filled(name) and is_filled(rating) and is_filled(message)):
        missing = next(
            k for k, v in (("name", name), ("rating", rating), ("message", message))
            if not is_filled(v)
        )
        raise SubmissionValidationError(REVIEW_REQUIRED_MESSAGE, missing)

    rating_value = parse_rating(rating)
    if rating_value is None or not MIN_RATING <= rating_value <= MAX_RATING:
        raise SubmissionValidationError(INVALID_RATING_MESSAGE, "rating")

    return {
        "id": record_id,
        "name": _text(name),
        "city": _text(fields.get("city") or ""),
        "rating": rating_value,
        "message": _text(message),
        "timestamp": timestamp,
        "status": ReviewStatus.PENDING.value,
    }
