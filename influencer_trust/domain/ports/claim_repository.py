"""Persistence interface for analysis results."""

from datetime import datetime
from typing import Protocol

from ..models.claim import Claim


class ClaimRepository(Protocol):
    """Protocol for the sink that stores claims and trust scores.

    Both operations raise StorageFailure on unrecoverable storage errors.
    """

    async def save_claim(self, claim: Claim) -> Claim:
        """Store a claim and return it with its assigned identifier."""
        ...

    async def update_influencer_trust(
        self,
        influencer_id: int,
        trust_score: float,
        analyzed_at: datetime,
    ) -> None:
        """Record a new trust score and last-analyzed timestamp."""
        ...
