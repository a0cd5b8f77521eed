"""
XHTML document translation

Translates the human-readable text of an XHTML/HTML document while keeping
its markup, attributes and structure intact.
"""
from .exceptions import (
    XhtmlTranslationError,
    DocumentParseError,
    FragmentTranslationError,
    DocumentSerializationError,
    TranslationCancelledError,
    TranslationTimeoutError,
)
from .document import parse_document, serialize_document
from .walker import TextFragment, collect_fragments
from .dispatcher import FragmentOutcome, dispatch_fragments
from .aggregator import aggregate_outcomes
from .service import (
    XhtmlTranslationService,
    TranslationMetadata,
    TranslationResult,
)

__all__ = [
    'XhtmlTranslationError',
    'DocumentParseError',
    'FragmentTranslationError',
    'DocumentSerializationError',
    'TranslationCancelledError',
    'TranslationTimeoutError',
    'parse_document',
    'serialize_document',
    'TextFragment',
    'collect_fragments',
    'FragmentOutcome',
    'dispatch_fragments',
    'aggregate_outcomes',
    'XhtmlTranslationService',
    'TranslationMetadata',
    'TranslationResult',
]
