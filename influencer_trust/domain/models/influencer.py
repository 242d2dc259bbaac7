"""Domain models for influencers and their posts."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Influencer(BaseModel):
    """A tracked social-media account."""

    influencer_id: int = Field(..., description="Opaque identity assigned by the registry")
    name: str = Field(default="", description="Display name")
    handle: str = Field(..., description="Unique account handle, without the leading @")
    follower_count: int = Field(default=0, ge=0, description="Number of followers")
    trust_score: float = Field(default=0.0, description="Mean claim confidence of the last analysis")
    last_analyzed: Optional[datetime] = Field(None, description="When the last analysis completed")

    class Config:
        """Pydantic model configuration."""
        frozen = True
        json_schema_extra = {
            "example": {
                "influencer_id": 1,
                "name": "Dr. Health",
                "handle": "drhealth",
                "follower_count": 120000,
                "trust_score": 72.5,
                "last_analyzed": "2024-03-01T12:00:00",
            }
        }


class RawPost(BaseModel):
    """A post as retrieved from the post source."""

    text: str = Field(..., description="Post text content")
    created_at: datetime = Field(default_factory=datetime.utcnow, description="When the post was created")
    post_id: Optional[str] = Field(None, description="Upstream post identifier if known")

    class Config:
        """Pydantic model configuration."""
        frozen = True
