"""Analysis pipeline configuration."""

import logging
import os

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class AnalysisConfig(BaseModel):
    """Tuning knobs for analysis runs."""

    oracle_timeout: float = Field(default=30.0, gt=0, description="Per-oracle-call timeout in seconds")
    max_concurrency: int = Field(default=5, ge=1, description="Claims classified concurrently")
    max_posts: int = Field(default=10, ge=1, description="Posts analyzed per run")

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        """Create configuration from environment variables."""
        config = cls(
            oracle_timeout=float(os.getenv("ANALYSIS_ORACLE_TIMEOUT", "30.0")),
            max_concurrency=int(os.getenv("ANALYSIS_MAX_CONCURRENCY", "5")),
            max_posts=int(os.getenv("ANALYSIS_MAX_POSTS", "10")),
        )
        logger.info(
            f"⚙️ Analysis config: timeout={config.oracle_timeout}s, "
            f"concurrency={config.max_concurrency}, max_posts={config.max_posts}"
        )
        return config
