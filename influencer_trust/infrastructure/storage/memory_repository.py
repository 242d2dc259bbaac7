"""In-process storage for influencers, posts and claims."""

import asyncio
import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from ...domain.exceptions import InfluencerNotFound, SourceUnavailable, StorageFailure
from ...domain.models.claim import Claim
from ...domain.models.influencer import Influencer, RawPost
from ...domain.ports.claim_repository import ClaimRepository
from ...domain.ports.post_source import PostSource

logger = logging.getLogger(__name__)


class InMemoryInfluencerRepository(ClaimRepository):
    """Influencer registry, post store and claim sink kept in memory.

    Identifiers are assigned incrementally starting at 1. Records are
    immutable models; updates replace them.
    """

    def __init__(self):
        """Initialize empty storage."""
        self._influencers: Dict[int, Influencer] = {}
        self._posts: Dict[int, List[RawPost]] = {}
        self._claims: Dict[int, List[Claim]] = {}
        self._next_influencer_id = 1
        self._next_claim_id = 1
        self._lock = asyncio.Lock()

    async def upsert_influencer(
        self,
        handle: str,
        name: Optional[str] = None,
        follower_count: Optional[int] = None,
    ) -> Tuple[Influencer, bool]:
        """Create an influencer or update the one with the same handle.

        Name and follower count are only changed when a truthy value is
        given.

        Returns:
            The stored influencer and whether it was newly created
        """
        handle = handle.lstrip("@")
        async with self._lock:
            existing = self._find_by_handle(handle)
            if existing is None:
                influencer = Influencer(
                    influencer_id=self._next_influencer_id,
                    name=name or "",
                    handle=handle,
                    follower_count=follower_count or 0,
                )
                self._next_influencer_id += 1
                self._influencers[influencer.influencer_id] = influencer
                logger.info(f"➕ Influencer @{handle} created with id {influencer.influencer_id}")
                return influencer, True

            influencer = existing.model_copy(update={
                "name": name or existing.name,
                "follower_count": follower_count or existing.follower_count,
            })
            self._influencers[influencer.influencer_id] = influencer
            logger.info(f"✏️ Influencer @{handle} updated")
            return influencer, False

    async def get_influencer(self, influencer_id: int) -> Influencer:
        """Get an influencer by id.

        Raises:
            InfluencerNotFound: If the id is unknown
        """
        influencer = self._influencers.get(influencer_id)
        if influencer is None:
            raise InfluencerNotFound(influencer_id)
        return influencer

    async def find_by_handle(self, handle: str) -> Optional[Influencer]:
        return self._find_by_handle(handle.lstrip("@"))

    def _find_by_handle(self, handle: str) -> Optional[Influencer]:
        for influencer in self._influencers.values():
            if influencer.handle == handle:
                return influencer
        return None

    async def list_influencers(self) -> List[Influencer]:
        """List all influencers ordered by id."""
        return [self._influencers[key] for key in sorted(self._influencers)]

    async def store_posts(self, influencer_id: int, posts: List[RawPost]) -> int:
        """Store fetched posts, skipping ones already stored by post id.

        Returns:
            Number of posts added
        """
        async with self._lock:
            if influencer_id not in self._influencers:
                raise InfluencerNotFound(influencer_id)
            stored = self._posts.setdefault(influencer_id, [])
            known_ids = {post.post_id for post in stored if post.post_id}
            added = 0
            for post in posts:
                if post.post_id and post.post_id in known_ids:
                    continue
                stored.append(post)
                if post.post_id:
                    known_ids.add(post.post_id)
                added += 1
            return added

    async def list_posts(self, influencer_id: int, limit: Optional[int] = None) -> List[RawPost]:
        """List stored posts, newest first."""
        posts = sorted(
            self._posts.get(influencer_id, []),
            key=lambda post: post.created_at,
            reverse=True,
        )
        return posts if limit is None else posts[:limit]

    async def save_claim(self, claim: Claim) -> Claim:
        """Store a claim and assign it an id.

        Raises:
            StorageFailure: If the owning influencer does not exist
        """
        async with self._lock:
            if claim.influencer_id not in self._influencers:
                raise StorageFailure(f"Cannot store claim for unknown influencer {claim.influencer_id}")
            stored = claim.model_copy(update={"claim_id": self._next_claim_id})
            self._next_claim_id += 1
            self._claims.setdefault(claim.influencer_id, []).append(stored)
            return stored

    async def list_claims(self, influencer_id: int) -> List[Claim]:
        """List an influencer's claims ordered by id."""
        return list(self._claims.get(influencer_id, []))

    async def update_influencer_trust(
        self,
        influencer_id: int,
        trust_score: float,
        analyzed_at: datetime,
    ) -> None:
        """Record a trust score and last-analyzed timestamp.

        Raises:
            StorageFailure: If the influencer does not exist
        """
        async with self._lock:
            influencer = self._influencers.get(influencer_id)
            if influencer is None:
                raise StorageFailure(f"Cannot update trust of unknown influencer {influencer_id}")
            self._influencers[influencer_id] = influencer.model_copy(update={
                "trust_score": trust_score,
                "last_analyzed": analyzed_at,
            })
            logger.info(f"📊 Trust score of @{influencer.handle} set to {trust_score:.2f}")


class StoredPostSource(PostSource):
    """Serves posts previously stored in the repository."""

    def __init__(self, repository: InMemoryInfluencerRepository):
        self._repository = repository

    async def fetch_posts(self, handle: str, max_count: int) -> List[RawPost]:
        influencer = await self._repository.find_by_handle(handle)
        if influencer is None:
            raise SourceUnavailable(f"Unknown handle: {handle}")
        return await self._repository.list_posts(influencer.influencer_id, limit=max_count)
