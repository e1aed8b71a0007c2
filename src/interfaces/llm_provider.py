"""Abstract base class for LLM service providers.

Defines the contract for any large-language-model backend used to write
articles.  Implementations wrap the Anthropic API (Claude) or an
OpenAI-compatible endpoint.  The pipeline and the article writer only ever
see this interface, so swapping providers is a one-line change in
``src/main.py``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementations: AnthropicLLMProvider, OpenAILLMProvider
# Located in: src/providers/llm/
class ILLMProvider(ABC):
    """Contract for the text-generation API behind the article writer."""

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a text completion from the model.

        Parameters
        ----------
        system_prompt:
            The system/instruction message that sets the model's behaviour.
        user_prompt:
            The user-facing prompt containing the event data.
        temperature:
            Sampling temperature (0.0 = deterministic, 1.0 = creative).
        max_tokens:
            Upper bound on the response length; ``None`` uses the
            provider's configured default.

        Returns
        -------
        str
            The model's text response.

        Raises
        ------
        src.utils.errors.LLMError
            If the API call fails or returns an empty response.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this provider, e.g. ``"anthropic"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if a credential is configured.

        Does not contact the remote service.  The pipeline refuses to start a
        generation run when this is ``False``.
        """
