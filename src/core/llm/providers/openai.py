"""
OpenAI-compatible provider implementation.

This module provides the OpenAICompatibleProvider class for interacting with
OpenAI API and compatible endpoints (llama.cpp, LM Studio, vLLM, OpenAI, etc.).
"""

from typing import Optional
import json
import httpx

from ..base import LLMProvider, LLMResponse
from ..exceptions import LLMConnectionError, LLMProviderError, LLMResponseError

from src.config import (
    OPENAI_API_ENDPOINT,
    REQUEST_TIMEOUT,
    LLM_TEMPERATURE,
)
from src.utils.llm_logger import log_llm_interaction


class OpenAICompatibleProvider(LLMProvider):
    """OpenAI-compatible API provider (works with llama.cpp, LM Studio, vLLM, OpenAI, etc.)"""

    def __init__(self, api_endpoint: Optional[str], model: str, api_key: Optional[str] = None,
                 timeout: float = REQUEST_TIMEOUT, temperature: float = LLM_TEMPERATURE):
        super().__init__(model, timeout=timeout)
        self.api_endpoint = api_endpoint or OPENAI_API_ENDPOINT
        self.api_key = api_key
        self.temperature = temperature

    async def generate(self, prompt: str, system_prompt: Optional[str] = None) -> LLMResponse:
        """
        Generate text using an OpenAI compatible chat completions API.

        Args:
            prompt: The user prompt (content to translate)
            system_prompt: Optional system prompt (role/instructions)

        Returns:
            LLMResponse with content and token usage info
        """
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        # Build messages array with optional system prompt
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        payload = {
            "model": self.model,
            "messages": messages,
            "stream": False,
            "temperature": self.temperature,
        }

        client = await self._get_client()
        try:
            response = await client.post(
                self.api_endpoint,
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            raise LLMConnectionError(f"OpenAI-compatible API timed out after {self.timeout}s: {e}") from e
        except httpx.HTTPError as e:
            raise LLMConnectionError(f"Failed to send request to {self.api_endpoint}: {e}") from e

        if response.status_code != 200:
            body = response.text[:500]
            raise LLMProviderError(
                f"OpenAI-compatible API returned status {response.status_code}: {body}",
                status_code=response.status_code,
                response_body=body,
            )

        try:
            response_json = response.json()
            response_text = response_json["choices"][0]["message"]["content"]
        except json.JSONDecodeError as e:
            raise LLMResponseError(f"Failed to decode OpenAI-compatible response: {e}",
                                   response_body=response.text[:500]) from e
        except (KeyError, IndexError, TypeError) as e:
            raise LLMResponseError(f"OpenAI-compatible response has no message content: {e!r}",
                                   response_body=response.text[:500]) from e

        if not isinstance(response_text, str):
            raise LLMResponseError("OpenAI-compatible response content is not text",
                                   response_body=response.text[:500])

        usage = response_json.get("usage") or {}
        llm_response = LLMResponse(
            content=response_text,
            prompt_tokens=usage.get("prompt_tokens", 0),
            completion_tokens=usage.get("completion_tokens", 0),
        )
        log_llm_interaction(system_prompt, prompt, response_text, model=self.model, prefix="openai",
                            prompt_tokens=llm_response.prompt_tokens,
                            completion_tokens=llm_response.completion_tokens)
        return llm_response
