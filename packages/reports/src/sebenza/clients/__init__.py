"""LLM client implementations for Sebenza flows."""

from sebenza.clients.base import LLMResponse, extract_json
from sebenza.clients.claude import ClaudeClient
from sebenza.clients.gemini import GeminiClient
from sebenza.clients.ollama import OllamaClient
from sebenza.clients.openai_client import OpenAIClient
from sebenza.config import get_settings

LLMClient = ClaudeClient | OpenAIClient | GeminiClient | OllamaClient

_PROVIDERS: dict[str, type[LLMClient]] = {
    "claude": ClaudeClient,
    "openai": OpenAIClient,
    "gemini": GeminiClient,
    "ollama": OllamaClient,
}


def create_client(provider: str | None = None) -> LLMClient:
    """Instantiate the client for ``provider`` (defaults to LLM_PROVIDER)."""
    name = provider or get_settings().llm_provider
    client_cls = _PROVIDERS.get(name)
    if client_cls is None:
        raise ValueError(f"Unknown LLM provider: {name!r}")
    return client_cls()


__all__ = [
    "ClaudeClient",
    "OpenAIClient",
    "GeminiClient",
    "OllamaClient",
    "LLMClient",
    "LLMResponse",
    "create_client",
    "extract_json",
]
