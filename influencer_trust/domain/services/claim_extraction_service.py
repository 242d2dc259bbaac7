"""Turning raw posts into a list of unique candidate claims."""

import logging
import re
from typing import Iterable, List, Optional

from ..exceptions import OracleUnavailable
from ..models.influencer import RawPost
from ..ports.text_oracle import TextOracle
from .oracle_calls import ask_oracle

logger = logging.getLogger(__name__)

EXTRACTION_PROMPT = """Extract all factual health-related claims from the following text, one per line:
---
{text}
---
If none found, return an empty list."""

# "- claim", "* claim", "• claim", "1. claim", "2) claim"
_LIST_MARKER = re.compile(r"^(?:[-*•]\s*|\d+[.)]\s+)")

# "---", "===", "***": echoed prompt delimiters and markdown rules
_SEPARATOR = re.compile(r"^[-=_*\s]{3,}$")

# Ways the model says "nothing found" instead of returning an empty response
_EMPTY_MARKERS = {"[]", "none", "none.", "n/a", "no claims found", "no claims found."}


def normalize_posts(posts: Iterable[RawPost]) -> str:
    """Join post texts into one corpus, one post per line, order preserved."""
    return "\n".join(post.text for post in posts)


def parse_claim_lines(response: str) -> List[str]:
    """Split an oracle response into candidate claims.

    Every line that survives trimming and list-marker stripping is a
    candidate, prose included.
    """
    claims = []
    for line in response.splitlines():
        if _SEPARATOR.match(line.strip()):
            continue
        text = _LIST_MARKER.sub("", line.strip()).strip()
        if not text or text.lower() in _EMPTY_MARKERS:
            continue
        claims.append(text)
    return claims


def deduplicate_claims(claims: Iterable[str]) -> List[str]:
    """Drop claims whose trimmed, case-folded text was already seen.

    Keeps the first occurrence's original text and order.
    """
    seen = set()
    unique = []
    for claim in claims:
        key = claim.strip().casefold()
        if key in seen:
            continue
        seen.add(key)
        unique.append(claim)
    return unique


class ClaimExtractor:
    """Pulls discrete health claims out of a corpus via the oracle."""

    def __init__(self, oracle: TextOracle, timeout: Optional[float] = None):
        """Initialize the extractor.

        Args:
            oracle: Text oracle used for extraction
            timeout: Per-call timeout in seconds
        """
        self._oracle = oracle
        self._timeout = timeout

    async def extract(self, corpus: str) -> List[str]:
        """Extract claims from a corpus.

        Returns an empty list when nothing was found or the oracle failed.
        """
        logger.info(f"🔍 Extracting claims from {len(corpus)} chars of text")
        try:
            response = await ask_oracle(
                self._oracle,
                EXTRACTION_PROMPT.format(text=corpus),
                timeout=self._timeout,
            )
        except OracleUnavailable as e:
            logger.warning(f"⚠️ Claim extraction failed, treating as no claims: {e}")
            return []

        claims = parse_claim_lines(response)
        logger.debug(f"📝 Candidate claim lines: {claims}")
        logger.info(f"📝 Extracted {len(claims)} candidate claims")
        return claims
