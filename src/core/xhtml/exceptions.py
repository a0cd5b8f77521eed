"""
Custom exceptions for the XHTML translation pipeline.

This module defines specific exception types for the failure scenarios of a
document translation. Every failure reaches the caller as exactly one of
these; none is retried or suppressed inside the pipeline.
"""
from typing import Any, Dict, Optional


class XhtmlTranslationError(Exception):
    """Base exception for all XHTML translation errors.

    Attributes:
        message: Human-readable error message
        context: Additional context about the error
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class DocumentParseError(XhtmlTranslationError):
    """Raised when the input document cannot be parsed.

    Attributes:
        original_error: The underlying parsing error
        content_preview: First 200 chars of problematic content
    """

    def __init__(self, message: str, original_error: Exception = None, content_preview: str = None):
        super().__init__(message)
        self.original_error = original_error
        self.content_preview = content_preview


class FragmentTranslationError(XhtmlTranslationError):
    """Raised when one or more fragment translations failed.

    Only one failure is reported: the first one in document order. The
    number of failed fragments is available in ``context['failed_fragments']``.

    Attributes:
        fragment_text: Original text of the reported fragment
        cause: The exception raised by the translation capability
        fragment_index: Position of the fragment in document order
    """

    def __init__(
        self,
        message: str,
        fragment_text: str = "",
        cause: Optional[BaseException] = None,
        fragment_index: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, context)
        self.fragment_text = fragment_text
        self.cause = cause
        self.fragment_index = fragment_index


class DocumentSerializationError(XhtmlTranslationError):
    """Raised when the translated tree cannot be rendered back to text."""

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.original_error = original_error


class TranslationCancelledError(XhtmlTranslationError):
    """Raised when the caller cancels a translation in progress."""
    pass


class TranslationTimeoutError(TranslationCancelledError):
    """Raised when translation exceeds its deadline.

    Attributes:
        timeout: The deadline that was exceeded, in seconds
    """

    def __init__(self, message: str, timeout: Optional[float] = None):
        super().__init__(message, {'timeout': timeout})
        self.timeout = timeout
