"""ChatGPT implementation of the text oracle interface."""

import logging
import os
from typing import Dict, Optional

from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel, Field

from ...domain.exceptions import OracleUnavailable
from ...domain.ports.text_oracle import TextOracle

logger = logging.getLogger(__name__)


class ChatGPTConfig(BaseModel):
    """Configuration for the ChatGPT oracle."""

    api_key: str = Field(default="", description="OpenAI API key")
    model: str = Field(default="gpt-3.5-turbo", description="Chat model to use")
    temperature: float = Field(default=0.0, description="Temperature for responses")
    max_tokens: int = Field(default=1000, description="Maximum tokens per response")
    timeout: float = Field(default=30.0, description="API timeout in seconds")

    @classmethod
    def from_env(cls) -> "ChatGPTConfig":
        """Create configuration from environment variables."""
        api_key = os.getenv("OPENAI_API_KEY", "")
        if not api_key:
            logger.warning("⚠️ OPENAI_API_KEY not found in environment variables")
        return cls(
            api_key=api_key,
            model=os.getenv("OPENAI_MODEL", "gpt-3.5-turbo"),
        )


class ChatGPTOracle(TextOracle):
    """Answers prompts with the OpenAI chat completions API."""

    def __init__(
        self,
        config: Optional[ChatGPTConfig] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        """Initialize the oracle.

        Args:
            config: Oracle configuration
            client: Pre-built OpenAI client, mainly for tests
        """
        self._config = config or ChatGPTConfig()
        self._client = client
        self._initialized = client is not None

    async def initialize(self) -> None:
        """Create the OpenAI client."""
        if self._client is None:
            if not self._config.api_key:
                logger.warning("⚠️ ChatGPT oracle has no API key - calls will fall back to defaults")
            try:
                self._client = AsyncOpenAI(
                    api_key=self._config.api_key,
                    timeout=self._config.timeout,
                )
            except OpenAIError as e:
                raise OracleUnavailable(f"Failed to initialize ChatGPT oracle: {e}") from e
        self._initialized = True
        logger.info(f"✅ ChatGPT oracle ready (model={self._config.model})")

    async def complete(self, prompt: str) -> str:
        """Send a single-message prompt and return the reply text."""
        if not self._client:
            raise OracleUnavailable("ChatGPT oracle not initialized")

        try:
            response = await self._client.chat.completions.create(
                model=self._config.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self._config.temperature,
                max_tokens=self._config.max_tokens,
            )
        except OpenAIError as e:
            raise OracleUnavailable(f"ChatGPT request failed: {e}") from e

        if not response.choices:
            raise OracleUnavailable("ChatGPT returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise OracleUnavailable("ChatGPT returned an empty message")
        return content

    async def shutdown(self) -> None:
        """Close the underlying client."""
        if self._client:
            await self._client.close()
            self._client = None
        self._initialized = False

    @property
    def provider_name(self) -> str:
        """Get the name of the oracle."""
        return "ChatGPT"

    @property
    def is_available(self) -> bool:
        """Check if the oracle is ready."""
        return self._initialized and self._client is not None

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get the oracle's capabilities."""
        return {
            "claim_extraction": True,
            "claim_categorization": True,
            "claim_verification": True,
        }
