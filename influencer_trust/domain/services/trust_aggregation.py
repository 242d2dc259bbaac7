"""Trust score aggregation."""

from typing import NamedTuple, Sequence

from ..models.claim import ClaimAssessment, VerificationStatus


class TrustAggregate(NamedTuple):
    """Aggregate metrics for one analysis run."""
    trust_score: float
    verified_count: int


def aggregate_trust(assessments: Sequence[ClaimAssessment]) -> TrustAggregate:
    """Combine per-claim results into one trust score.

    The trust score is the mean confidence, 0.0 when there are no claims.
    """
    if not assessments:
        return TrustAggregate(trust_score=0.0, verified_count=0)

    trust_score = sum(a.confidence for a in assessments) / len(assessments)
    verified_count = sum(
        1 for a in assessments
        if a.status.value.casefold() == VerificationStatus.VERIFIED.value.casefold()
    )
    return TrustAggregate(trust_score=trust_score, verified_count=verified_count)
