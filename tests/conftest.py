"""Test configuration and common fixtures."""

from datetime import datetime, timedelta
from typing import List

import pytest
import pytest_asyncio

from influencer_trust.domain.models.influencer import Influencer, RawPost
from influencer_trust.infrastructure.storage.memory_repository import InMemoryInfluencerRepository


@pytest.fixture
def repository() -> InMemoryInfluencerRepository:
    """Provide an empty in-memory repository."""
    return InMemoryInfluencerRepository()


@pytest_asyncio.fixture
async def influencer(repository: InMemoryInfluencerRepository) -> Influencer:
    """Provide an influencer registered in the repository."""
    influencer, _ = await repository.upsert_influencer(
        handle="drhealth",
        name="Dr. Health",
        follower_count=120000,
    )
    return influencer


@pytest.fixture
def posts() -> List[RawPost]:
    """Provide three posts, oldest first."""
    start = datetime(2024, 3, 1, 12, 0, 0)
    texts = [
        "Sugar causes diabetes. Cut it out today!",
        "Reminder: sugar causes diabetes.",
        "A 20 minute run every morning improves mood.",
    ]
    return [
        RawPost(post_id=str(i), text=text, created_at=start + timedelta(hours=i))
        for i, text in enumerate(texts, 1)
    ]
