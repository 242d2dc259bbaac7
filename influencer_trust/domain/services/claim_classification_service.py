"""Categorization and verification of individual claims."""

import json
import logging
import math
import re
from typing import Any, Optional

from ..exceptions import OracleUnavailable
from ..models.claim import (
    DEFAULT_CONFIDENCE,
    ClaimCategory,
    VerificationOutcome,
    VerificationStatus,
)
from ..ports.text_oracle import TextOracle
from .oracle_calls import ask_oracle

logger = logging.getLogger(__name__)

CATEGORY_PROMPT = """Categorize the following health claim into exactly one of these categories: {labels}.
Respond with the category name only.
Claim: {claim}"""

VERIFICATION_PROMPT = """Verify the following health claim against established scientific evidence.
Respond in JSON format with:
{{"status": "Verified" | "Questionable" | "Debunked", "confidence": <number between 0 and 100>}}
Claim: {claim}"""

_JSON_DECODER = json.JSONDecoder()
_CATEGORY_PREFIX = re.compile(r"^category\s*:\s*", re.IGNORECASE)


def parse_category(response: str) -> ClaimCategory:
    """Map an oracle response to a category, falling back to Other."""
    lines = response.strip().splitlines()
    if not lines:
        return ClaimCategory.OTHER

    label = _CATEGORY_PREFIX.sub("", lines[0].strip())
    label = label.strip(" \t\"'`.*-").replace("_", " ")
    for category in ClaimCategory:
        if label.casefold() == category.value.casefold():
            return category

    logger.warning(f"⚠️ Unknown category label {lines[0]!r}, using {ClaimCategory.OTHER.value}")
    return ClaimCategory.OTHER


def _parse_status(value: Any) -> VerificationStatus:
    if isinstance(value, str):
        for status in VerificationStatus:
            if value.strip().casefold() == status.value.casefold():
                return status
    logger.warning(f"⚠️ Invalid verification status {value!r}, using {VerificationStatus.QUESTIONABLE.value}")
    return VerificationStatus.QUESTIONABLE


def _parse_confidence(value: Any) -> float:
    if isinstance(value, bool):
        confidence = None
    elif isinstance(value, (int, float)):
        confidence = float(value)
    elif isinstance(value, str):
        try:
            confidence = float(value.strip().rstrip("%"))
        except ValueError:
            confidence = None
    else:
        confidence = None

    if confidence is None or not math.isfinite(confidence) or not 0.0 <= confidence <= 100.0:
        logger.warning(f"⚠️ Invalid confidence {value!r}, using {DEFAULT_CONFIDENCE}")
        return DEFAULT_CONFIDENCE
    return confidence


def parse_verification(payload: str) -> VerificationOutcome:
    """Parse the oracle's verification payload.

    Each field falls back independently: an unknown status becomes
    Questionable and an invalid confidence becomes 50.0. A payload that
    is not a JSON object yields both fallbacks. Only the first object is
    read; text around it is ignored.
    """
    payload = payload or ""
    start = payload.find("{")
    if start == -1:
        logger.warning("⚠️ Verification payload contains no JSON object, using fallback")
        return VerificationOutcome()

    try:
        data, _ = _JSON_DECODER.raw_decode(payload[start:])
    except json.JSONDecodeError as e:
        logger.warning(f"⚠️ Could not parse verification payload: {e}")
        return VerificationOutcome()

    if not isinstance(data, dict):
        return VerificationOutcome()

    return VerificationOutcome(
        status=_parse_status(data.get("status")),
        confidence=_parse_confidence(data.get("confidence")),
    )


class ClaimCategorizer:
    """Assigns a claim to one of the fixed categories via the oracle."""

    def __init__(self, oracle: TextOracle, timeout: Optional[float] = None):
        self._oracle = oracle
        self._timeout = timeout

    async def categorize(self, claim: str) -> ClaimCategory:
        """Categorize a claim. Never raises."""
        prompt = CATEGORY_PROMPT.format(
            labels=", ".join(category.value for category in ClaimCategory),
            claim=claim,
        )
        try:
            response = await ask_oracle(self._oracle, prompt, timeout=self._timeout)
        except OracleUnavailable as e:
            logger.warning(f"⚠️ Categorization failed for '{claim}': {e}")
            return ClaimCategory.OTHER
        return parse_category(response)


class ClaimVerifier:
    """Assigns a claim a verification status and confidence via the oracle."""

    def __init__(self, oracle: TextOracle, timeout: Optional[float] = None):
        self._oracle = oracle
        self._timeout = timeout

    async def verify(self, claim: str) -> VerificationOutcome:
        """Verify a claim. Never raises."""
        try:
            response = await ask_oracle(
                self._oracle,
                VERIFICATION_PROMPT.format(claim=claim),
                timeout=self._timeout,
            )
        except OracleUnavailable as e:
            logger.warning(f"⚠️ Verification failed for '{claim}': {e}")
            return VerificationOutcome()
        return parse_verification(response)
