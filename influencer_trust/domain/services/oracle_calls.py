"""Timeout-bounded oracle invocation shared by the pipeline stages."""

import asyncio
import logging
from typing import Optional

from ..exceptions import OracleUnavailable
from ..ports.text_oracle import TextOracle

logger = logging.getLogger(__name__)


async def ask_oracle(oracle: TextOracle, prompt: str, timeout: Optional[float] = None) -> str:
    """Send a prompt to the oracle, bounded by a timeout.

    Args:
        oracle: Text oracle to query
        prompt: Prompt text
        timeout: Seconds to wait for a response, None for no limit

    Returns:
        The oracle's response text

    Raises:
        OracleUnavailable: On timeout or any oracle error
    """
    try:
        return await asyncio.wait_for(oracle.complete(prompt), timeout=timeout)
    except OracleUnavailable:
        raise
    except asyncio.TimeoutError as e:
        raise OracleUnavailable(f"Oracle call timed out after {timeout}s") from e
    except Exception as e:
        raise OracleUnavailable(f"Oracle call failed: {type(e).__name__}: {e}") from e
