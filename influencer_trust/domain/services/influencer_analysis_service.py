"""Service for running the claim analysis pipeline on one influencer."""

import asyncio
import logging
from datetime import datetime
from typing import List, Optional

from ..exceptions import AnalysisFailed, SourceUnavailable, StorageFailure
from ..models.analysis_result import AnalysisResult, PipelineState
from ..models.claim import ClaimAssessment
from ..models.influencer import Influencer
from ..ports.claim_repository import ClaimRepository
from ..ports.post_source import PostSource
from ..ports.text_oracle import TextOracle
from .claim_classification_service import ClaimCategorizer, ClaimVerifier
from .claim_extraction_service import ClaimExtractor, deduplicate_claims, normalize_posts
from .trust_aggregation import aggregate_trust

logger = logging.getLogger(__name__)


class InfluencerAnalysisService:
    """Sequences extraction, classification and aggregation for an influencer.

    A run ends in one of two ways: an AnalysisResult (state done or no_op)
    or an AnalysisFailed exception when persistence fails. Oracle and
    source failures never abort a run.
    """

    def __init__(
        self,
        oracle: TextOracle,
        post_source: PostSource,
        repository: ClaimRepository,
        oracle_timeout: Optional[float] = 30.0,
        max_concurrency: int = 5,
        max_posts: int = 10,
    ):
        """Initialize the service.

        Args:
            oracle: Text oracle used by every stage
            post_source: Source of the influencer's posts
            repository: Sink for claims and trust scores
            oracle_timeout: Per-oracle-call timeout in seconds
            max_concurrency: Maximum number of claims classified at once
            max_posts: Maximum number of posts fetched per run
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")

        self._source = post_source
        self._repository = repository
        self._max_concurrency = max_concurrency
        self._max_posts = max_posts
        self._extractor = ClaimExtractor(oracle, timeout=oracle_timeout)
        self._categorizer = ClaimCategorizer(oracle, timeout=oracle_timeout)
        self._verifier = ClaimVerifier(oracle, timeout=oracle_timeout)
        logger.info("🔧 InfluencerAnalysisService initialized")

    async def analyze(self, influencer: Influencer) -> AnalysisResult:
        """Run the full pipeline for one influencer.

        Args:
            influencer: Influencer to analyze

        Returns:
            Analysis result

        Raises:
            AnalysisFailed: If claims or the trust score could not be stored
        """
        logger.info(f"🔍 Starting analysis for @{influencer.handle}")

        state = PipelineState.FETCHING
        try:
            posts = await self._source.fetch_posts(influencer.handle, self._max_posts)
        except SourceUnavailable as e:
            logger.warning(f"⚠️ No posts retrievable for @{influencer.handle}: {e}")
            return AnalysisResult.no_op(f"No posts available for @{influencer.handle}")

        if not posts:
            logger.info(f"📭 No posts for @{influencer.handle}, nothing to analyze")
            return AnalysisResult.no_op(f"No posts available for @{influencer.handle}")

        state = PipelineState.EXTRACTING
        raw_claims = await self._extractor.extract(normalize_posts(posts))
        if not raw_claims:
            logger.info(f"📭 No health-related claims found for @{influencer.handle}")
            return AnalysisResult.no_op("No health-related claims found")

        state = PipelineState.DEDUPLICATING
        unique_claims = deduplicate_claims(raw_claims)
        logger.info(f"🧹 {len(raw_claims)} claims reduced to {len(unique_claims)} unique")

        state = PipelineState.CLASSIFYING
        assessments = await self._classify_all(unique_claims)

        state = PipelineState.AGGREGATING
        aggregate = aggregate_trust(assessments)

        state = PipelineState.PERSISTING
        analyzed_at = datetime.utcnow()
        try:
            saved = []
            for assessment in assessments:
                claim = assessment.to_claim(influencer.influencer_id, analyzed_at)
                saved.append(await self._repository.save_claim(claim))
            await self._repository.update_influencer_trust(
                influencer.influencer_id,
                aggregate.trust_score,
                analyzed_at,
            )
        except StorageFailure as e:
            logger.error(f"❌ Storing analysis for @{influencer.handle} failed: {e}", exc_info=True)
            raise AnalysisFailed(influencer.influencer_id, state.value, str(e)) from e

        logger.info(
            f"✅ Analysis complete for @{influencer.handle}: {len(saved)} claims, "
            f"{aggregate.verified_count} verified, trust score {aggregate.trust_score:.2f}"
        )
        return AnalysisResult(
            claims_analyzed=len(saved),
            claims_verified=aggregate.verified_count,
            overall_trust_score=aggregate.trust_score,
            state=PipelineState.DONE,
            claims=saved,
        )

    async def _classify_all(self, claims: List[str]) -> List[ClaimAssessment]:
        """Categorize and verify every claim, at most max_concurrency at a time.

        Returns once every claim has a result, in input order.
        """
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def classify(index: int, claim: str) -> ClaimAssessment:
            async with semaphore:
                logger.info(f"🔍 Classifying claim {index + 1}/{len(claims)}: {claim}")
                category, outcome = await asyncio.gather(
                    self._categorizer.categorize(claim),
                    self._verifier.verify(claim),
                )
            return ClaimAssessment(
                text=claim,
                category=category,
                status=outcome.status,
                confidence=outcome.confidence,
            )

        return list(await asyncio.gather(*(classify(i, c) for i, c in enumerate(claims))))
