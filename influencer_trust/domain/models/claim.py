"""Domain models for health claims."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_CONFIDENCE = 50.0


class ClaimCategory(str, Enum):
    """Fixed set of claim categories."""

    NUTRITION = "Nutrition"
    MEDICINE = "Medicine"
    MENTAL_HEALTH = "Mental Health"
    FITNESS = "Fitness"
    OTHER = "Other"


class VerificationStatus(str, Enum):
    """Possible verification outcomes."""

    VERIFIED = "Verified"  # Supported by scientific consensus
    QUESTIONABLE = "Questionable"  # Weak, mixed or missing evidence
    DEBUNKED = "Debunked"  # Contradicted by evidence


class VerificationOutcome(BaseModel):
    """Status and confidence assigned to one claim."""

    status: VerificationStatus = VerificationStatus.QUESTIONABLE
    confidence: float = Field(default=DEFAULT_CONFIDENCE, ge=0.0, le=100.0)

    class Config:
        frozen = True


class ClaimAssessment(BaseModel):
    """A unique claim together with its classification results."""

    text: str
    category: ClaimCategory = ClaimCategory.OTHER
    status: VerificationStatus = VerificationStatus.QUESTIONABLE
    confidence: float = Field(default=DEFAULT_CONFIDENCE, ge=0.0, le=100.0)

    class Config:
        frozen = True

    def to_claim(self, influencer_id: int, collected_at: Optional[datetime] = None) -> "Claim":
        """Build the claim record persisted for an influencer."""
        return Claim(
            influencer_id=influencer_id,
            text=self.text,
            category=self.category,
            verification_status=self.status,
            confidence_score=self.confidence,
            date_collected=collected_at or datetime.utcnow(),
        )


class Claim(BaseModel):
    """Represents a health claim attributed to an influencer."""

    claim_id: Optional[int] = Field(None, description="Identifier assigned when the claim is stored")
    influencer_id: int = Field(..., description="Influencer the claim belongs to")
    text: str = Field(..., description="The claim text")
    category: ClaimCategory = Field(default=ClaimCategory.OTHER, description="Claim category")
    verification_status: VerificationStatus = Field(
        default=VerificationStatus.QUESTIONABLE,
        description="Verification status",
    )
    confidence_score: float = Field(
        default=DEFAULT_CONFIDENCE,
        ge=0.0,
        le=100.0,
        description="Confidence in the verification status (0-100)",
    )
    date_collected: datetime = Field(default_factory=datetime.utcnow, description="When the claim was collected")

    class Config:
        """Pydantic model configuration."""
        frozen = True  # Corrections are new claims
        json_schema_extra = {
            "example": {
                "claim_id": 7,
                "influencer_id": 1,
                "text": "Drinking green tea boosts metabolism.",
                "category": "Nutrition",
                "verification_status": "Questionable",
                "confidence_score": 55.0,
            }
        }
