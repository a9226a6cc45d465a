from abc import ABC, abstractmethod


class BaseAnalysisClient(ABC):
    """Contract for provider-specific analysis AI clients."""

    @property
    def is_configured(self) -> bool:
        """Whether the client holds the credentials it needs."""
        return True

    @abstractmethod
    async def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        """Return provider response as plain text."""
