"""Domain model for influencer analysis results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from .claim import Claim


class PipelineState(Enum):
    """States of one analysis run."""
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    DEDUPLICATING = "deduplicating"
    CLASSIFYING = "classifying"
    AGGREGATING = "aggregating"
    PERSISTING = "persisting"
    DONE = "done"
    NO_OP = "no_op"


@dataclass
class AnalysisResult:
    """Outcome of one analysis run for one influencer."""

    claims_analyzed: int
    claims_verified: int
    overall_trust_score: float
    state: PipelineState = PipelineState.DONE
    message: str = "Analysis complete"
    claims: List[Claim] = field(default_factory=list)

    def __post_init__(self):
        """Validate the result."""
        if not 0 <= self.overall_trust_score <= 100:
            raise ValueError("Trust score must be between 0 and 100")

        if self.claims_verified > self.claims_analyzed:
            raise ValueError("Verified count cannot exceed analyzed count")

    @classmethod
    def no_op(cls, message: str) -> "AnalysisResult":
        """Result of a run that found nothing to analyze."""
        return cls(
            claims_analyzed=0,
            claims_verified=0,
            overall_trust_score=0.0,
            state=PipelineState.NO_OP,
            message=message,
        )

    @property
    def is_no_op(self) -> bool:
        return self.state == PipelineState.NO_OP

    def to_dict(self) -> Dict[str, Any]:
        """Convert AnalysisResult to dictionary format for API responses."""
        return {
            'message': self.message,
            'state': self.state.value,
            'claims_analyzed': self.claims_analyzed,
            'claims_verified': self.claims_verified,
            'overall_trust_score': self.overall_trust_score,
            'claims': [claim.model_dump(mode="json") for claim in self.claims],
        }
