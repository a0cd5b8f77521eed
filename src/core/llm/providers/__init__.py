"""
LLM Provider Implementations

Individual provider implementations for different LLM APIs.

Providers:
    - ollama: Local Ollama server
    - openai: OpenAI-compatible APIs
"""

from .ollama import OllamaProvider
from .openai import OpenAICompatibleProvider

__all__ = ['OllamaProvider', 'OpenAICompatibleProvider']
