"""Tests for the in-memory influencer repository."""

from datetime import datetime

import pytest

from influencer_trust.domain.exceptions import InfluencerNotFound, SourceUnavailable, StorageFailure
from influencer_trust.domain.models.claim import Claim
from influencer_trust.domain.models.influencer import RawPost
from influencer_trust.infrastructure.storage.memory_repository import StoredPostSource


@pytest.mark.asyncio
async def test_upsert_creates_then_updates(repository):
    created, is_new = await repository.upsert_influencer("@drhealth", name="Dr. Health", follower_count=10)
    assert is_new
    assert created.influencer_id == 1
    assert created.handle == "drhealth"

    updated, is_new = await repository.upsert_influencer("drhealth", follower_count=20)
    assert not is_new
    assert updated.influencer_id == 1
    assert updated.name == "Dr. Health"
    assert updated.follower_count == 20

    other, _ = await repository.upsert_influencer("fitguru")
    assert other.influencer_id == 2
    assert [i.handle for i in await repository.list_influencers()] == ["drhealth", "fitguru"]


@pytest.mark.asyncio
async def test_get_unknown_influencer(repository):
    with pytest.raises(InfluencerNotFound):
        await repository.get_influencer(99)


@pytest.mark.asyncio
async def test_save_claim_assigns_ids(repository, influencer):
    first = await repository.save_claim(Claim(influencer_id=influencer.influencer_id, text="a"))
    second = await repository.save_claim(Claim(influencer_id=influencer.influencer_id, text="b"))

    assert (first.claim_id, second.claim_id) == (1, 2)
    assert await repository.list_claims(influencer.influencer_id) == [first, second]


@pytest.mark.asyncio
async def test_save_claim_unknown_influencer(repository):
    with pytest.raises(StorageFailure):
        await repository.save_claim(Claim(influencer_id=99, text="orphan"))


@pytest.mark.asyncio
async def test_update_trust(repository, influencer):
    analyzed_at = datetime(2024, 3, 5, 9, 0)
    await repository.update_influencer_trust(influencer.influencer_id, 72.5, analyzed_at)

    updated = await repository.get_influencer(influencer.influencer_id)
    assert updated.trust_score == 72.5
    assert updated.last_analyzed == analyzed_at
    assert updated.follower_count == influencer.follower_count


@pytest.mark.asyncio
async def test_update_trust_unknown_influencer(repository):
    with pytest.raises(StorageFailure):
        await repository.update_influencer_trust(99, 50.0, datetime.utcnow())


@pytest.mark.asyncio
async def test_store_posts_skips_known_ids(repository, influencer, posts):
    assert await repository.store_posts(influencer.influencer_id, posts) == 3
    assert await repository.store_posts(influencer.influencer_id, posts[:1]) == 0

    stored = await repository.list_posts(influencer.influencer_id)
    assert [p.post_id for p in stored] == ["3", "2", "1"]
    assert len(await repository.list_posts(influencer.influencer_id, limit=2)) == 2


@pytest.mark.asyncio
async def test_store_posts_unknown_influencer(repository, posts):
    with pytest.raises(InfluencerNotFound):
        await repository.store_posts(99, posts)


@pytest.mark.asyncio
async def test_stored_post_source(repository, influencer, posts):
    await repository.store_posts(influencer.influencer_id, posts)
    source = StoredPostSource(repository)

    fetched = await source.fetch_posts("drhealth", 2)
    assert [p.post_id for p in fetched] == ["3", "2"]

    with pytest.raises(SourceUnavailable):
        await source.fetch_posts("nobody", 2)


@pytest.mark.asyncio
async def test_stored_post_source_no_posts(repository, influencer):
    assert await StoredPostSource(repository).fetch_posts("drhealth", 5) == []


@pytest.mark.asyncio
async def test_posts_without_ids_are_always_stored(repository, influencer):
    post = RawPost(text="Untracked post")
    assert await repository.store_posts(influencer.influencer_id, [post, post]) == 2
