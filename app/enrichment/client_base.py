from abc import ABC, abstractmethod


class BaseEnrichmentClient(ABC):
    """Contract for provider-specific generative text clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        """Return provider response as plain text."""
