"""Tests for the oracle factory."""

from unittest.mock import patch

import pytest
import pytest_asyncio

from influencer_trust.infrastructure.ai.chatgpt_oracle import ChatGPTOracle
from influencer_trust.infrastructure.ai.factory import OracleFactory


@pytest_asyncio.fixture
async def oracle_factory():
    """Create an oracle factory with a test API key in the environment."""
    factory = OracleFactory()
    with patch.dict("os.environ", {"OPENAI_API_KEY": "test-key", "OPENAI_MODEL": "gpt-test"}):
        yield factory
    await factory.shutdown()


@pytest.mark.asyncio
async def test_create_chatgpt_from_env(oracle_factory):
    oracle = await oracle_factory.create_provider("chatgpt")

    assert isinstance(oracle, ChatGPTOracle)
    assert oracle.is_available
    assert oracle._config.model == "gpt-test"


@pytest.mark.asyncio
async def test_create_provider_is_cached(oracle_factory):
    first = await oracle_factory.create_provider("chatgpt")
    second = await oracle_factory.create_provider("chatgpt")
    assert first is second


@pytest.mark.asyncio
async def test_available_providers(oracle_factory):
    assert oracle_factory.available_providers == {"chatgpt": False}

    await oracle_factory.create_provider("chatgpt")
    assert oracle_factory.available_providers == {"chatgpt": True}


@pytest.mark.asyncio
async def test_shutdown(oracle_factory):
    oracle = await oracle_factory.create_provider("chatgpt")

    await oracle_factory.shutdown()

    assert not oracle.is_available
    assert oracle_factory.available_providers == {"chatgpt": False}


@pytest.mark.asyncio
async def test_unknown_provider(oracle_factory):
    with pytest.raises(ValueError):
        await oracle_factory.create_provider("unknown")
