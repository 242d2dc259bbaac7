"""Dependency injection configuration for hexagonal architecture."""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from dotenv import load_dotenv

# Load environment variables before any configuration is read
load_dotenv()

from ..domain.services.influencer_analysis_service import InfluencerAnalysisService
from ..domain.ports.post_source import PostSource
from .ai.factory import OracleFactory
from .analysis_config import AnalysisConfig
from .sources.twitter_adapter import TwitterConfig, TwitterPostSource
from .storage.memory_repository import InMemoryInfluencerRepository, StoredPostSource

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Service container for dependency injection."""

    def __init__(self, analysis_config: Optional[AnalysisConfig] = None):
        """Initialize service container."""
        self._analysis_config = analysis_config or AnalysisConfig.from_env()
        self._oracle_factory = OracleFactory()
        self._services: Dict[str, Any] = {}
        self._setup_services()

    def _setup_services(self):
        """Setup all services and their dependencies."""
        logger.info("🔧 Setting up service container...")

        repository = InMemoryInfluencerRepository()
        twitter_source = TwitterPostSource(TwitterConfig.from_env())

        # Note: the analysis service is created lazily once the oracle is up
        self._services = {
            'repository': repository,
            'post_fetcher': twitter_source,
            'stored_post_source': StoredPostSource(repository),
            'analysis_service': None,
        }

        logger.info("✅ Service container setup completed")

    async def _ensure_analysis_service(self) -> InfluencerAnalysisService:
        """Ensure the analysis service is created with its oracle."""
        if self._services['analysis_service'] is None:
            logger.info("🔧 Creating InfluencerAnalysisService...")
            oracle = await self._oracle_factory.create_provider("chatgpt")
            self._services['analysis_service'] = InfluencerAnalysisService(
                oracle=oracle,
                post_source=self._services['stored_post_source'],
                repository=self._services['repository'],
                oracle_timeout=self._analysis_config.oracle_timeout,
                max_concurrency=self._analysis_config.max_concurrency,
                max_posts=self._analysis_config.max_posts,
            )
            logger.info("✅ InfluencerAnalysisService created")

        return self._services['analysis_service']

    def get(self, service_name: str) -> Any:
        """Get a service by name.

        Args:
            service_name: Name of the service

        Returns:
            Service instance

        Raises:
            KeyError: If service not found
        """
        if service_name not in self._services:
            raise KeyError(f"Service '{service_name}' not found")
        return self._services[service_name]

    def get_repository(self) -> InMemoryInfluencerRepository:
        """Get the influencer repository."""
        return self.get('repository')

    def get_post_fetcher(self) -> PostSource:
        """Get the remote post source."""
        return self.get('post_fetcher')

    async def get_analysis_service(self) -> InfluencerAnalysisService:
        """Get the analysis service with its oracle."""
        return await self._ensure_analysis_service()

    def status(self) -> Dict[str, Dict[str, bool]]:
        """Availability of the external collaborators."""
        return {
            "oracles": self._oracle_factory.available_providers,
            "post_sources": {
                self.get_post_fetcher().provider_name: self.get_post_fetcher().is_available,
            },
        }

    async def shutdown(self) -> None:
        """Release oracle and HTTP resources."""
        await self._oracle_factory.shutdown()
        await self.get_post_fetcher().shutdown()
        self._services['analysis_service'] = None


# Global service container instance
@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get global service container instance.

    Returns:
        Service container instance
    """
    return ServiceContainer()


# Convenience functions for FastAPI dependency injection
def get_repository() -> InMemoryInfluencerRepository:
    """FastAPI dependency for the influencer repository."""
    return get_service_container().get_repository()


def get_post_fetcher() -> PostSource:
    """FastAPI dependency for the remote post source."""
    return get_service_container().get_post_fetcher()


async def get_analysis_service() -> InfluencerAnalysisService:
    """FastAPI dependency for the analysis service."""
    return await get_service_container().get_analysis_service()
