"""Tests for the categorizer and verifier."""

import json
from unittest.mock import AsyncMock

import pytest

from influencer_trust.domain.exceptions import OracleUnavailable
from influencer_trust.domain.models.claim import ClaimCategory, VerificationOutcome, VerificationStatus
from influencer_trust.domain.services.claim_classification_service import (
    ClaimCategorizer,
    ClaimVerifier,
    parse_category,
    parse_verification,
)


@pytest.mark.parametrize(
    "response,expected",
    [
        ("Nutrition", ClaimCategory.NUTRITION),
        ("  medicine\n", ClaimCategory.MEDICINE),
        ("Mental Health.", ClaimCategory.MENTAL_HEALTH),
        ("Category: Fitness", ClaimCategory.FITNESS),
        ('"Other"', ClaimCategory.OTHER),
        ("mental_health", ClaimCategory.MENTAL_HEALTH),
    ],
)
def test_parse_category_known_labels(response, expected):
    assert parse_category(response) == expected


def test_parse_category_unknown_label():
    """Responses that match no label become Other."""
    assert parse_category("Astrology") == ClaimCategory.OTHER
    assert parse_category("This is about sleep hygiene") == ClaimCategory.OTHER
    assert parse_category("") == ClaimCategory.OTHER


def test_parse_verification_valid_payload():
    outcome = parse_verification(json.dumps({"status": "Verified", "confidence": 92}))
    assert outcome == VerificationOutcome(status=VerificationStatus.VERIFIED, confidence=92.0)


def test_parse_verification_in_code_fence():
    payload = '```json\n{"status": "debunked", "confidence": "15"}\n```'
    outcome = parse_verification(payload)
    assert outcome.status == VerificationStatus.DEBUNKED
    assert outcome.confidence == 15.0


def test_parse_verification_ignores_braces_after_verdict():
    """Braced text after the verdict object does not discard the verdict."""
    payload = '{"status": "Verified", "confidence": 90}\nSources: {WHO, CDC}'
    outcome = parse_verification(payload)
    assert outcome.status == VerificationStatus.VERIFIED
    assert outcome.confidence == 90.0


def test_parse_verification_unparseable_payload():
    """A payload that cannot be parsed yields the full fallback pair."""
    outcome = parse_verification("I think this claim is probably true.")
    assert outcome.status == VerificationStatus.QUESTIONABLE
    assert outcome.confidence == 50.0

    assert parse_verification("{not json}") == VerificationOutcome()
    assert parse_verification("") == VerificationOutcome()


def test_parse_verification_per_field_fallback():
    """Each field falls back on its own."""
    outcome = parse_verification(json.dumps({"status": "Verified", "confidence": 150}))
    assert outcome.status == VerificationStatus.VERIFIED
    assert outcome.confidence == 50.0

    outcome = parse_verification(json.dumps({"status": "Probably", "confidence": 80}))
    assert outcome.status == VerificationStatus.QUESTIONABLE
    assert outcome.confidence == 80.0

    outcome = parse_verification(json.dumps({"status": "Debunked"}))
    assert outcome.status == VerificationStatus.DEBUNKED
    assert outcome.confidence == 50.0


@pytest.mark.parametrize("confidence", [-1, 100.5, "high", None, True, [70]])
def test_parse_verification_invalid_confidence(confidence):
    outcome = parse_verification(json.dumps({"status": "Verified", "confidence": confidence}))
    assert outcome.confidence == 50.0


def test_parse_verification_boundary_confidence():
    assert parse_verification('{"status": "Verified", "confidence": 0}').confidence == 0.0
    assert parse_verification('{"status": "Verified", "confidence": 100}').confidence == 100.0


@pytest.mark.asyncio
async def test_categorize_uses_oracle():
    oracle = AsyncMock()
    oracle.complete.return_value = "Nutrition"
    categorizer = ClaimCategorizer(oracle, timeout=1.0)

    assert await categorizer.categorize("Sugar causes diabetes.") == ClaimCategory.NUTRITION
    prompt = oracle.complete.call_args.args[0]
    assert "Sugar causes diabetes." in prompt
    assert "Mental Health" in prompt


@pytest.mark.asyncio
async def test_categorize_unknown_response_is_other():
    oracle = AsyncMock()
    oracle.complete.return_value = "Cosmetics"
    assert await ClaimCategorizer(oracle).categorize("Retinol reverses aging.") == ClaimCategory.OTHER


@pytest.mark.asyncio
async def test_categorize_oracle_failure_is_other():
    oracle = AsyncMock()
    oracle.complete.side_effect = OracleUnavailable("auth error")
    assert await ClaimCategorizer(oracle).categorize("claim") == ClaimCategory.OTHER


@pytest.mark.asyncio
async def test_verify_uses_oracle():
    oracle = AsyncMock()
    oracle.complete.return_value = '{"status": "Verified", "confidence": 88.5}'
    verifier = ClaimVerifier(oracle, timeout=1.0)

    outcome = await verifier.verify("Exercise improves mood.")

    assert outcome.status == VerificationStatus.VERIFIED
    assert outcome.confidence == 88.5
    assert "Exercise improves mood." in oracle.complete.call_args.args[0]


@pytest.mark.asyncio
async def test_verify_oracle_failure_is_fallback():
    oracle = AsyncMock()
    oracle.complete.side_effect = ConnectionError("unreachable")
    outcome = await ClaimVerifier(oracle).verify("claim")
    assert outcome == VerificationOutcome(status=VerificationStatus.QUESTIONABLE, confidence=50.0)
