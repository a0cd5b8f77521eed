"""
LLM-specific exceptions.

This module defines all custom exceptions used in the LLM provider system.
"""
from typing import Optional


class LLMProviderError(Exception):
    """
    Raised when an LLM provider fails to translate a piece of text.

    Attributes:
        status_code: HTTP status returned by the server, if any
        response_body: First part of the server's response body, if any
    """

    def __init__(self, message: str, status_code: Optional[int] = None,
                 response_body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class LLMConnectionError(LLMProviderError):
    """
    Raised when the LLM server cannot be reached or does not answer in time.
    """
    pass


class LLMResponseError(LLMProviderError):
    """
    Raised when the LLM server answers with a payload that cannot be decoded
    or that does not contain a translation.
    """
    pass
