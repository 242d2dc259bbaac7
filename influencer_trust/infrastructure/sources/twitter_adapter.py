"""Twitter API v2 implementation of the post source interface."""

import logging
import os
from typing import Any, Dict, List, Optional

import httpx
from cachetools import TTLCache
from pydantic import BaseModel, Field, ValidationError

from ...domain.exceptions import SourceUnavailable
from ...domain.models.influencer import RawPost
from ...domain.ports.post_source import PostSource

logger = logging.getLogger(__name__)


class TwitterConfig(BaseModel):
    """Configuration for the Twitter post source."""

    bearer_token: str = Field(default="", description="Twitter API v2 bearer token")
    base_url: str = Field(default="https://api.twitter.com/2", description="API base URL")
    timeout: float = Field(default=10.0, description="Request timeout in seconds")
    cache_ttl: int = Field(default=3600, description="User id cache TTL in seconds")
    cache_maxsize: int = Field(default=1000, description="Maximum cached user ids")

    @classmethod
    def from_env(cls) -> "TwitterConfig":
        """Create configuration from environment variables."""
        bearer_token = os.getenv("TWITTER_BEARER_TOKEN", "")
        if not bearer_token:
            logger.warning("⚠️ TWITTER_BEARER_TOKEN not found in environment variables")
        return cls(bearer_token=bearer_token)


class TwitterPostSource(PostSource):
    """Fetches an account's recent tweets from the Twitter API v2.

    The API only accepts page sizes between 5 and 100, so smaller
    requests are fetched at the minimum and truncated.
    """

    MIN_RESULTS = 5
    MAX_RESULTS = 100

    def __init__(
        self,
        config: Optional[TwitterConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the source.

        Args:
            config: Source configuration
            client: Pre-built HTTP client, mainly for tests
        """
        self._config = config or TwitterConfig()
        self._client = client
        self._user_ids: TTLCache = TTLCache(
            maxsize=self._config.cache_maxsize,
            ttl=self._config.cache_ttl,
        )

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                headers={"Authorization": f"Bearer {self._config.bearer_token}"},
            )
        return self._client

    async def fetch_posts(self, handle: str, max_count: int = 5) -> List[RawPost]:
        """Fetch the most recent tweets of a handle.

        Raises:
            SourceUnavailable: If the token is missing, the handle is unknown
                or the API cannot be reached
        """
        if not self._config.bearer_token:
            raise SourceUnavailable("TWITTER_BEARER_TOKEN not set in environment")
        if max_count <= 0:
            return []

        handle = handle.lstrip("@")
        user_id = await self._lookup_user_id(handle)
        page_size = min(max(max_count, self.MIN_RESULTS), self.MAX_RESULTS)

        logger.info(f"🐦 Fetching up to {page_size} tweets for @{handle}")
        payload = await self._get_json(
            f"/users/{user_id}/tweets",
            params={"max_results": page_size, "tweet.fields": "created_at"},
        )

        posts = []
        for tweet in payload.get("data") or []:
            try:
                posts.append(
                    RawPost(
                        post_id=tweet.get("id"),
                        text=tweet["text"],
                        created_at=tweet["created_at"],
                    )
                )
            except (KeyError, ValidationError) as e:
                logger.warning(f"⚠️ Skipping malformed tweet for @{handle}: {e}")

        logger.info(f"✅ Fetched {len(posts)} tweets for @{handle}")
        return posts[:max_count]

    async def _lookup_user_id(self, handle: str) -> str:
        """Resolve a handle to a user id, with caching."""
        key = handle.lower()
        if key in self._user_ids:
            return self._user_ids[key]

        payload = await self._get_json(f"/users/by/username/{handle}")
        user_id = (payload.get("data") or {}).get("id")
        if not user_id:
            raise SourceUnavailable(f"User not found for handle: {handle}")

        self._user_ids[key] = user_id
        return user_id

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            response = await self._get_client().get(path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise SourceUnavailable(
                f"Twitter request failed: {e.response.status_code} - {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise SourceUnavailable(f"Twitter request failed: {e}") from e
        except ValueError as e:
            raise SourceUnavailable(f"Twitter returned invalid JSON: {e}") from e

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def provider_name(self) -> str:
        return "Twitter"

    @property
    def is_available(self) -> bool:
        """Check if the source has credentials configured."""
        return bool(self._config.bearer_token)
