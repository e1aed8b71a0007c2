"""LLM provider adapters.

Two concrete implementations of ILLMProvider (src/interfaces/llm_provider.py):
    - AnthropicLLMProvider - Claude (preferred when ANTHROPIC_API_KEY is set)
    - OpenAILLMProvider    - gpt-4o-mini or any OpenAI-compatible endpoint

At startup, main.py creates the provider matching the available API key
and injects it into the blog pipeline.
"""

from src.providers.llm.anthropic_provider import AnthropicLLMProvider
from src.providers.llm.openai_provider import OpenAILLMProvider

__all__ = ["AnthropicLLMProvider", "OpenAILLMProvider"]
