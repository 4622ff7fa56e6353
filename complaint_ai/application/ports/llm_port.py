"""Port interface for the external generative-text model."""

from abc import ABC, abstractmethod


class LLMPort(ABC):
    @property
    @abstractmethod
    def model_name(self) -> str:
        ...

    @abstractmethod
    def has_credentials(self) -> bool:
        """True when a non-blank API credential is configured."""
        ...

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Send a single prompt and return the raw response text.

        One request, no streaming, no retries. Provider errors propagate
        to the caller unchanged.
        """
        ...

    async def close(self) -> None:
        """Release any client resources; default is a no-op."""
        return None
