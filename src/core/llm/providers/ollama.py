"""
Ollama provider implementation.

This module provides the OllamaProvider class for interacting with local
Ollama servers through the non-streaming /api/generate endpoint.
"""

from typing import Optional
import json
import logging
import httpx

from ..base import LLMProvider, LLMResponse
from ..exceptions import LLMConnectionError, LLMProviderError, LLMResponseError

from src.config import (
    API_ENDPOINT,
    DEFAULT_MODEL,
    REQUEST_TIMEOUT,
    LLM_TEMPERATURE,
)
from src.utils.llm_logger import log_llm_interaction

logger = logging.getLogger(__name__)


class OllamaProvider(LLMProvider):
    """Ollama API provider - one /api/generate request per fragment"""

    def __init__(self, api_endpoint: str = API_ENDPOINT, model: str = DEFAULT_MODEL,
                 timeout: float = REQUEST_TIMEOUT, temperature: float = LLM_TEMPERATURE):
        super().__init__(model, timeout=timeout)
        self.api_endpoint = api_endpoint
        self.temperature = temperature

    def _build_payload(self, prompt: str, system_prompt: Optional[str]) -> dict:
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                # Lower temperature for more deterministic/focused output
                "temperature": self.temperature,
            },
        }
        if system_prompt:
            payload["system"] = system_prompt
        return payload

    async def generate(self, prompt: str, system_prompt: Optional[str] = None) -> LLMResponse:
        """
        Generate text using the Ollama generate API.

        Args:
            prompt: The user prompt (content to translate)
            system_prompt: Optional system prompt (role/instructions)

        Returns:
            LLMResponse with content and token usage info

        Raises:
            LLMConnectionError: server unreachable or request timed out
            LLMProviderError: server answered with a non-200 status
            LLMResponseError: answer could not be decoded
        """
        client = await self._get_client()
        try:
            response = await client.post(
                self.api_endpoint,
                json=self._build_payload(prompt, system_prompt),
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            raise LLMConnectionError(f"Ollama request timed out after {self.timeout}s: {e}") from e
        except httpx.HTTPError as e:
            raise LLMConnectionError(f"Failed to send request to Ollama at {self.api_endpoint}: {e}") from e

        if response.status_code != 200:
            body = response.text[:500]
            raise LLMProviderError(
                f"LLM server returned status {response.status_code}: {body}",
                status_code=response.status_code,
                response_body=body,
            )

        try:
            response_json = response.json()
        except json.JSONDecodeError as e:
            raise LLMResponseError(f"Failed to decode Ollama response: {e}",
                                   response_body=response.text[:500]) from e

        content = response_json.get("response") if isinstance(response_json, dict) else None
        if not isinstance(content, str):
            raise LLMResponseError("Ollama response has no 'response' field",
                                   response_body=response.text[:500])

        llm_response = LLMResponse(
            content=content,
            prompt_tokens=response_json.get("prompt_eval_count", 0),
            completion_tokens=response_json.get("eval_count", 0),
        )
        log_llm_interaction(system_prompt, prompt, content, model=self.model, prefix="ollama",
                            prompt_tokens=llm_response.prompt_tokens,
                            completion_tokens=llm_response.completion_tokens)
        return llm_response
