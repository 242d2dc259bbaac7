"""Protocol for text oracles."""

from typing import Protocol


class TextOracle(Protocol):
    """Protocol defining the interface for text-understanding services.

    Implementations raise OracleUnavailable on network, auth or
    response errors.
    """

    async def initialize(self) -> None:
        """Initialize the oracle."""
        ...

    async def shutdown(self) -> None:
        """Clean up resources."""
        ...

    async def complete(self, prompt: str) -> str:
        """Return the oracle's text response to a prompt."""
        ...

    @property
    def provider_name(self) -> str:
        """Get the provider name."""
        ...

    @property
    def is_available(self) -> bool:
        """Check if the oracle is ready to answer prompts."""
        ...
