"""Domain exceptions for influencer analysis."""

from typing import Optional


class InfluencerTrustError(Exception):
    """Base class for all influencer trust errors."""


class SourceUnavailable(InfluencerTrustError):
    """Raised when no posts can be retrieved for an influencer."""


class OracleUnavailable(InfluencerTrustError):
    """Raised when the text oracle cannot produce a response."""


class StorageFailure(InfluencerTrustError):
    """Raised when the persistence sink cannot store a record."""


class InfluencerNotFound(InfluencerTrustError):
    """Raised when an influencer id is not registered."""

    def __init__(self, influencer_id: int):
        super().__init__(f"Influencer not found: {influencer_id}")
        self.influencer_id = influencer_id


class AnalysisFailed(InfluencerTrustError):
    """Raised when an analysis run cannot complete.

    Carries the pipeline state the run had reached when it failed.
    """

    def __init__(self, influencer_id: int, state: str, reason: Optional[str] = None):
        message = f"Analysis of influencer {influencer_id} failed during {state}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.influencer_id = influencer_id
        self.state = state
