"""Influencer analysis endpoints."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from ...domain.exceptions import AnalysisFailed, InfluencerNotFound
from ...domain.services.influencer_analysis_service import InfluencerAnalysisService
from ...infrastructure.dependencies import get_analysis_service, get_repository
from ...infrastructure.storage.memory_repository import InMemoryInfluencerRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analyze", tags=["analysis"])


@router.post("/{influencer_id}")
async def analyze_influencer(
    influencer_id: int,
    repository: InMemoryInfluencerRepository = Depends(get_repository),
    service: InfluencerAnalysisService = Depends(get_analysis_service),
) -> Dict[str, Any]:
    """Analyze an influencer's stored posts and update its trust score.

    Args:
        influencer_id: Influencer to analyze

    Returns:
        Analysis summary with the stored claims

    Raises:
        HTTPException: If the influencer is unknown or the run failed
    """
    try:
        influencer = await repository.get_influencer(influencer_id)
    except InfluencerNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    try:
        result = await service.analyze(influencer)
    except AnalysisFailed as e:
        logger.error(f"❌ Analysis failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return result.to_dict()
