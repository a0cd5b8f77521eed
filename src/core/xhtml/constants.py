"""
Constants for XHTML translation processing

This module defines the default values used throughout the document
translation pipeline. The service takes all of them as explicit parameters;
these are only the fallbacks.
"""

DEFAULT_CONCURRENCY_LIMIT = 5
"""Maximum number of fragment translations in flight at once"""

DEFAULT_TRANSLATION_TIMEOUT = 300.0
"""Deadline for a whole document translation, in seconds (5 minutes)"""

DEFAULT_NON_TRANSLATABLE_TAGS = frozenset({'script', 'style'})
"""Local tag names whose direct text content is never translated"""

XHTML_NAMESPACE = 'http://www.w3.org/1999/xhtml'
"""Namespace of XHTML documents"""

CONTENT_PREVIEW_LENGTH = 200
"""Number of characters of input quoted in parse errors"""
