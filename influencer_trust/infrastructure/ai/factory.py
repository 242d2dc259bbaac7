"""Creation and lifecycle of the text oracles."""

import logging
from typing import Callable, Dict

from ...domain.ports.text_oracle import TextOracle
from .chatgpt_oracle import ChatGPTConfig, ChatGPTOracle

logger = logging.getLogger(__name__)


def _chatgpt_from_env() -> TextOracle:
    return ChatGPTOracle(ChatGPTConfig.from_env())


class OracleFactory:
    """Builds oracles by name from the environment and shuts them down."""

    def __init__(self):
        self._builders: Dict[str, Callable[[], TextOracle]] = {"chatgpt": _chatgpt_from_env}
        self._instances: Dict[str, TextOracle] = {}

    async def create_provider(self, name: str) -> TextOracle:
        """Return the initialized oracle for ``name``, creating it on first use.

        Raises:
            ValueError: If no oracle is known under that name
        """
        if name not in self._builders:
            raise ValueError(f"Provider '{name}' not found")

        if name not in self._instances:
            oracle = self._builders[name]()
            await oracle.initialize()
            self._instances[name] = oracle
            logger.info(f"✅ Oracle '{name}' created")

        return self._instances[name]

    @property
    def available_providers(self) -> Dict[str, bool]:
        """Known oracle names and whether each one is running."""
        return {name: name in self._instances for name in self._builders}

    async def shutdown(self) -> None:
        for oracle in self._instances.values():
            await oracle.shutdown()
        self._instances.clear()
