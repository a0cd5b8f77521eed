"""
LLM provider factory
"""
from src.config import (
    API_ENDPOINT,
    OLLAMA_DEFAULT_ENDPOINT,
    DEFAULT_MODEL,
    REQUEST_TIMEOUT,
    LLM_TEMPERATURE,
    OPENAI_API_KEY,
    TranslationConfig,
)
from .base import LLMProvider
from .providers import OllamaProvider, OpenAICompatibleProvider


def create_llm_provider(provider_type: str = "ollama", **kwargs) -> LLMProvider:
    """Factory function to create LLM providers"""
    provider_type = (provider_type or "ollama").lower()
    timeout = kwargs.get("timeout") or REQUEST_TIMEOUT
    temperature = kwargs.get("temperature", LLM_TEMPERATURE)

    if provider_type == "ollama":
        return OllamaProvider(
            api_endpoint=kwargs.get("api_endpoint") or API_ENDPOINT,
            model=kwargs.get("model") or DEFAULT_MODEL,
            timeout=timeout,
            temperature=temperature,
        )
    elif provider_type == "openai":
        api_key = kwargs.get("api_key") or OPENAI_API_KEY
        endpoint = kwargs.get("api_endpoint")
        # The Ollama default endpoint is meaningless for an OpenAI-compatible server
        if endpoint == OLLAMA_DEFAULT_ENDPOINT:
            endpoint = None
        return OpenAICompatibleProvider(
            api_endpoint=endpoint,
            model=kwargs.get("model") or DEFAULT_MODEL,
            api_key=api_key,
            timeout=timeout,
            temperature=temperature,
        )
    else:
        raise ValueError(f"Unknown provider type: {provider_type}")


def create_provider_from_config(config: TranslationConfig) -> LLMProvider:
    """Create the provider described by a TranslationConfig"""
    return create_llm_provider(
        config.llm_provider,
        api_endpoint=config.api_endpoint,
        model=config.model,
        api_key=config.openai_api_key,
        timeout=config.request_timeout,
        temperature=config.temperature,
    )
