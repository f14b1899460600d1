"""Submission Validation — pure record builders for quote requests and reviews.

Tests cover:
    - required fields (truthiness) and their exact messages
    - escaping of every free-text field
    - rating parsing: integral values accepted, everything else rejected
    - honeypot truthiness
"""

import pytest

from intake.core.errors import SubmissionValidationError
from intake.core.validate_submission import (
    INVALID_EMAIL_MESSAGE,
    INVALID_RATING_MESSAGE,
    QUOTE_REQUIRED_MESSAGE,
    REVIEW_REQUIRED_MESSAGE,
    build_quote_request,
    build_review,
    is_filled,
    is_honeypot,
    parse_rating,
)

TS = "2026-10-18T12:00:00.000Z"


def _quote(**overrides):
    fields = {"name": "Jane", "email": "jane@example.com", "phone": "555-0100"}
    fields.update(overrides)
    return fields


def _review(**overrides):
    fields = {"name": "Sam", "rating": 5, "message": "Fast and friendly"}
    fields.update(overrides)
    return fields


# ─── build_quote_request ─────────────────────────────────────────

def test_quote_request_has_defaults_and_pending_status():
    record = build_quote_request(_quote(), "id-1", TS)
    assert record == {
        "id": "id-1",
        "name": "Jane",
        "email": "jane@example.com",
        "phone": "555-0100",
        "address": "",
        "service": "",
        "message": "",
        "timestamp": TS,
        "emailStatus": "pending",
    }


@pytest.mark.parametrize("missing", ["name", "email", "phone"])
@pytest.mark.parametrize("empty", [None, "", 0, False])
def test_quote_request_requires_contact_fields(missing, empty):
    with pytest.raises(SubmissionValidationError) as exc:
        build_quote_request(_quote(**{missing: empty}), "id-1", TS)
    assert exc.value.message == QUOTE_REQUIRED_MESSAGE
    assert exc.value.field == missing
    assert exc.value.http_status == 400


@pytest.mark.parametrize("email", ["not-an-email", "a@", "@b.com"])
def test_quote_request_rejects_bad_email(email):
    with pytest.raises(SubmissionValidationError) as exc:
        build_quote_request(_quote(email=email), "id-1", TS)
    assert exc.value.message == INVALID_EMAIL_MESSAGE


def test_quote_request_escapes_every_text_field():
    hostile = "<script>alert(\"x\" & 'y')</script>"
    record = build_quote_request(
        _quote(name=hostile, phone=hostile, address=hostile,
               service=hostile, message=hostile),
        "id-1", TS,
    )
    for key in ("name", "phone", "address", "service", "message"):
        for char in "<>\"'":
            assert char not in record[key]
        assert "&amp;" in record[key]


def test_quote_request_escapes_valid_email_with_apostrophe():
    record = build_quote_request(_quote(email="o'brien@example.com"), "id-1", TS)
    assert record["email"] == "o&#039;brien@example.com"


def test_quote_request_coerces_non_string_values():
    record = build_quote_request(_quote(phone=5550100), "id-1", TS)
    assert record["phone"] == "5550100"


# ─── build_review ────────────────────────────────────────────────

def test_review_starts_pending_with_integer_rating():
    record = build_review(_review(rating="4", city="Boise"), "id-2", TS)
    assert record == {
        "id": "id-2",
        "name": "Sam",
        "city": "Boise",
        "rating": 4,
        "message": "Fast and friendly",
        "timestamp": TS,
        "status": "pending",
    }


@pytest.mark.parametrize("missing", ["name", "rating", "message"])
def test_review_requires_fields(missing):
    with pytest.raises(SubmissionValidationError) as exc:
        build_review(_review(**{missing: ""}), "id-2", TS)
    assert exc.value.message == REVIEW_REQUIRED_MESSAGE


@pytest.mark.parametrize("rating", [6, "abc", 3.5, "3.5", -1, "0", [4]])
def test_review_rejects_invalid_ratings(rating):
    with pytest.raises(SubmissionValidationError) as exc:
        build_review(_review(rating=rating), "id-2", TS)
    assert exc.value.message == INVALID_RATING_MESSAGE


def test_review_zero_rating_counts_as_missing():
    with pytest.raises(SubmissionValidationError) as exc:
        build_review(_review(rating=0), "id-2", TS)
    assert exc.value.http_status == 400


@pytest.mark.parametrize("rating", [1, 2, 3, 4, 5])
def test_review_accepts_each_valid_rating(rating):
    assert build_review(_review(rating=rating), "id-2", TS)["rating"] == rating


def test_review_escapes_text():
    record = build_review(_review(name="<b>", city="A&B", message="\"hi\""), "id-2", TS)
    assert record["name"] == "&lt;b&gt;"
    assert record["city"] == "A&amp;B"
    assert record["message"] == "&quot;hi&quot;"


# ─── parse_rating / is_honeypot ──────────────────────────────────

@pytest.mark.parametrize("value, expected", [
    (4, 4), ("4", 4), (" 4 ", 4), (4.0, 4), ("4.0", 4),
    ("abc", None), (3.5, None), (float("nan"), None), (float("inf"), None),
    (True, 1), (None, None), ([4], None),
])
def test_parse_rating(value, expected):
    assert parse_rating(value) == expected


@pytest.mark.parametrize("value, expected", [
    (None, False), ("", False), (0, False), (False, False), (float("nan"), False),
    ("http://spam", True), ("0", True), (1, True), ([], True), ({}, True),
])
def test_is_honeypot(value, expected):
    assert is_honeypot(value) is expected


def test_review_true_rating_denotes_one():
    record = build_review(_review(rating=True), "id-2", TS)
    assert record["rating"] == 1
    assert type(record["rating"]) is int


@pytest.mark.parametrize("value, expected", [
    (None, False), (False, False), ("", False), (0, False), (0.0, False),
    (float("nan"), False), (True, True), (" ", True), ("0", True), (-1, True),
    ([], True), ({}, True),
])
def test_is_filled(value, expected):
    assert is_filled(value) is expected
