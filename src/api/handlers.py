"""
Translation request handlers and processing logic
"""
import asyncio
import logging

from src.config import TranslationConfig
from src.core.xhtml import XhtmlTranslationService, TranslationResult

logger = logging.getLogger(__name__)


def run_translation(document_text, config: TranslationConfig, provider_factory) -> TranslationResult:
    """
    Run one document translation on a dedicated event loop.

    Flask views are synchronous and the provider's HTTP client is bound to
    the loop it was created on, so each request gets its own loop and its
    own provider.

    Args:
        document_text (str): XHTML/HTML markup to translate
        config (TranslationConfig): Per-request configuration
        provider_factory: Callable building an LLMProvider from a config

    Returns:
        TranslationResult

    Raises:
        ValueError: On invalid configuration
        XhtmlTranslationError: On translation failure
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(perform_translation(document_text, config, provider_factory))
    finally:
        asyncio.set_event_loop(None)
        loop.close()


async def perform_translation(document_text, config: TranslationConfig, provider_factory) -> TranslationResult:
    """
    Translate a document with a provider built for this call only.

    Args:
        document_text (str): XHTML/HTML markup to translate
        config (TranslationConfig): Per-request configuration
        provider_factory: Callable building an LLMProvider from a config
    """
    provider = provider_factory(config)
    try:
        service = XhtmlTranslationService(
            provider,
            concurrency_limit=config.max_concurrency,
            timeout=config.translation_timeout,
            non_translatable_tags=config.non_translatable_tags,
        )
        logger.info(f"Translating document ({len(document_text)} chars) "
                    f"{config.source_language} -> {config.target_language} with {config.model}")
        return await service.translate(
            document_text,
            config.source_language,
            config.target_language,
        )
    finally:
        await provider.close()
