"""
Base classes and data structures for LLM providers.

This module defines the abstract base class that all LLM providers must implement,
as well as common data structures like LLMResponse.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
import httpx

from src.config import REQUEST_TIMEOUT
from src.core.llm.exceptions import LLMResponseError
from src.core.llm.utils.extraction import clean_translation_output
from prompts.prompts import generate_translation_prompt


@dataclass
class LLMResponse:
    """Response from LLM with token usage information"""
    content: str
    prompt_tokens: int = 0  # Number of tokens in the prompt
    completion_tokens: int = 0  # Number of tokens in the response


class LLMProvider(ABC):
    """Abstract base class for LLM providers"""

    def __init__(self, model: str, timeout: float = REQUEST_TIMEOUT):
        """
        Initialize the LLM provider.

        Args:
            model: Model name/identifier
            timeout: Timeout in seconds for a single request
        """
        self.model = model
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create a persistent HTTP client with connection pooling"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
                timeout=httpx.Timeout(self.timeout),
            )
        return self._client

    async def close(self):
        """Close the HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def get_model_name(self) -> str:
        """Model identifier reported in translation metadata"""
        return self.model

    @abstractmethod
    async def generate(self, prompt: str, system_prompt: Optional[str] = None) -> LLMResponse:
        """
        Generate text from prompt.

        Args:
            prompt: The user prompt (content to process)
            system_prompt: Optional system prompt (role/instructions)

        Returns:
            LLMResponse object with content and token usage info

        Raises:
            LLMProviderError: if the request fails or the answer is unusable
        """
        pass

    async def translate_text(self, text: str, source_language: str, target_language: str) -> str:
        """Complete translation workflow for one text fragment: prompt, request, cleanup"""
        prompt = generate_translation_prompt(text.strip(), source_language, target_language)
        response = await self.generate(prompt.user, system_prompt=prompt.system)
        translated = clean_translation_output(response.content, source_text=text)
        if not translated.strip():
            raise LLMResponseError(f"{self.__class__.__name__} returned an empty translation")
        return translated
