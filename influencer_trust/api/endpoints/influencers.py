"""Influencer registry endpoints."""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field

from ...domain.exceptions import InfluencerNotFound, SourceUnavailable
from ...domain.models.claim import Claim
from ...domain.models.influencer import Influencer, RawPost
from ...domain.ports.post_source import PostSource
from ...infrastructure.dependencies import get_post_fetcher, get_repository
from ...infrastructure.storage.memory_repository import InMemoryInfluencerRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/influencers", tags=["influencers"])


class InfluencerUpsertRequest(BaseModel):
    """Request model for creating or updating an influencer."""

    name: Optional[str] = Field(None, description="Display name")
    handle: Optional[str] = Field(None, description="Account handle")
    follower_count: Optional[int] = Field(None, ge=0, description="Number of followers")


class InfluencerUpsertResponse(BaseModel):
    """Response model for influencer upserts."""

    message: str
    influencer_id: int


class InfluencerDetail(Influencer):
    """Influencer with its claims and stored posts."""

    claims: List[Claim] = Field(default_factory=list)
    posts: List[RawPost] = Field(default_factory=list)


class FetchPostsRequest(BaseModel):
    """Request model for fetching posts from the remote source."""

    count: int = Field(default=5, ge=1, le=100, description="Number of posts to fetch")


class FetchPostsResponse(BaseModel):
    """Response model for fetched posts."""

    message: str
    posts: List[Dict[str, Optional[str]]]


@router.get("", response_model=List[Influencer])
async def list_influencers(
    repository: InMemoryInfluencerRepository = Depends(get_repository),
) -> List[Influencer]:
    """List all influencers ordered by id."""
    return await repository.list_influencers()


@router.get("/{influencer_id}", response_model=InfluencerDetail)
async def get_influencer(
    influencer_id: int,
    repository: InMemoryInfluencerRepository = Depends(get_repository),
) -> InfluencerDetail:
    """Get an influencer with its claims and posts."""
    try:
        influencer = await repository.get_influencer(influencer_id)
    except InfluencerNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    return InfluencerDetail(
        **influencer.model_dump(),
        claims=await repository.list_claims(influencer_id),
        posts=await repository.list_posts(influencer_id),
    )


@router.post("", response_model=InfluencerUpsertResponse)
async def upsert_influencer(
    request: InfluencerUpsertRequest,
    response: Response,
    repository: InMemoryInfluencerRepository = Depends(get_repository),
) -> InfluencerUpsertResponse:
    """Create an influencer, or update the one with the same handle."""
    if not request.handle:
        raise HTTPException(status_code=400, detail="handle is required")

    influencer, created = await repository.upsert_influencer(
        handle=request.handle,
        name=request.name,
        follower_count=request.follower_count,
    )
    if created:
        response.status_code = 201
        return InfluencerUpsertResponse(message="Influencer created", influencer_id=influencer.influencer_id)
    return InfluencerUpsertResponse(message="Influencer updated", influencer_id=influencer.influencer_id)


@router.post("/{influencer_id}/posts", response_model=FetchPostsResponse)
async def fetch_posts(
    influencer_id: int,
    request: Optional[FetchPostsRequest] = None,
    repository: InMemoryInfluencerRepository = Depends(get_repository),
    post_fetcher: PostSource = Depends(get_post_fetcher),
) -> FetchPostsResponse:
    """Fetch recent posts from the remote source and store them."""
    request = request or FetchPostsRequest()
    try:
        influencer = await repository.get_influencer(influencer_id)
    except InfluencerNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    try:
        posts = await post_fetcher.fetch_posts(influencer.handle, request.count)
    except SourceUnavailable as e:
        logger.error(f"❌ Fetching posts for @{influencer.handle} failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    await repository.store_posts(influencer_id, posts)
    return FetchPostsResponse(
        message=f"Fetched {len(posts)} posts for @{influencer.handle}",
        posts=[{"id": post.post_id, "text": post.text} for post in posts],
    )
