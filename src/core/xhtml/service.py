"""
XHTML translation service

Entry point of the document translation pipeline:

    parse -> collect fragments -> dispatch -> aggregate -> serialize

The service owns no global state. Concurrency limit, deadline and the set of
non-translatable tags are constructor parameters; the translation capability
is any LLMProvider.
"""
import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Optional

from src.core.llm.base import LLMProvider
from .aggregator import aggregate_outcomes
from .constants import (
    DEFAULT_CONCURRENCY_LIMIT,
    DEFAULT_TRANSLATION_TIMEOUT,
    DEFAULT_NON_TRANSLATABLE_TAGS,
)
from .dispatcher import ProgressCallback, dispatch_fragments, validate_concurrency_limit
from .document import has_xml_declaration, parse_document, serialize_document
from .exceptions import (
    XhtmlTranslationError,
    TranslationCancelledError,
    TranslationTimeoutError,
)
from .walker import collect_fragments

logger = logging.getLogger(__name__)


def format_timestamp(moment: datetime) -> str:
    """Format a UTC datetime as RFC 3339 with a 'Z' suffix"""
    return moment.astimezone(timezone.utc).isoformat().replace('+00:00', 'Z')


@dataclass
class TranslationMetadata:
    """Information about a completed translation.

    Attributes:
        duration: Wall-clock time from call start to completion
        model: Model name reported by the provider
        timestamp: UTC completion time
    """
    duration: timedelta
    model: str
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        """JSON form: duration in integer nanoseconds, timestamp in RFC 3339"""
        duration_ns = (
            (self.duration.days * 86400 + self.duration.seconds) * 1_000_000_000
            + self.duration.microseconds * 1000
        )
        return {
            'duration': duration_ns,
            'model': self.model,
            'timestamp': format_timestamp(self.timestamp),
        }


@dataclass
class TranslationResult:
    """Translated document plus metadata"""
    translated_text: str
    metadata: TranslationMetadata
    fragment_count: int = field(default=0, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'translated_xhtml': self.translated_text,
            'metadata': self.metadata.to_dict(),
        }


class XhtmlTranslationService:
    """Translates the human-readable text of XHTML/HTML documents."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT,
        timeout: Optional[float] = DEFAULT_TRANSLATION_TIMEOUT,
        non_translatable_tags: Iterable[str] = DEFAULT_NON_TRANSLATABLE_TAGS
    ):
        """
        Args:
            llm_provider: Translation capability
            concurrency_limit: Maximum concurrent fragment translations
            timeout: Default deadline for a whole document, in seconds (None or 0 disables)
            non_translatable_tags: Tags whose direct text is never translated

        Raises:
            ValueError: If concurrency_limit is not a positive integer
        """
        self.llm_provider = llm_provider
        self.concurrency_limit = validate_concurrency_limit(concurrency_limit)
        self.timeout = timeout
        self.non_translatable_tags = frozenset(tag.lower() for tag in non_translatable_tags)

    async def translate(
        self,
        document_text: str,
        source_language: str,
        target_language: str,
        timeout: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> TranslationResult:
        """
        Translate a document from source_language to target_language.

        Either the whole document is translated or an error is raised;
        partial output is never returned.

        Args:
            document_text: XHTML/HTML markup
            source_language: Source language name
            target_language: Target language name
            timeout: Deadline in seconds for this call (defaults to the service timeout)
            cancel_event: Setting this event cancels the translation
            progress_callback: Optional callback(completed, total) per fragment

        Returns:
            TranslationResult with the translated document and metadata

        Raises:
            ValueError: If the document or a language is empty
            DocumentParseError: If the document cannot be parsed
            FragmentTranslationError: If any fragment failed to translate
            DocumentSerializationError: If the result cannot be rendered
            TranslationTimeoutError: If the deadline expired
            TranslationCancelledError: If cancel_event was set
        """
        if not document_text or not document_text.strip():
            raise ValueError("document_text must not be empty")
        if not source_language or not target_language:
            raise ValueError("source_language and target_language are required")

        effective_timeout = self.timeout if timeout is None else timeout
        if not effective_timeout:
            effective_timeout = None

        started = time.perf_counter()
        try:
            translated_text, fragment_count = await self._run_with_limits(
                self._translate_document(document_text, source_language, target_language, progress_callback),
                effective_timeout,
                cancel_event
            )
        except XhtmlTranslationError as e:
            logger.error(f"Translation {source_language} -> {target_language} failed: {e.message}")
            raise

        elapsed = time.perf_counter() - started
        metadata = TranslationMetadata(
            duration=timedelta(seconds=elapsed),
            model=self.llm_provider.get_model_name(),
            timestamp=datetime.now(timezone.utc),
        )
        logger.info(f"Translated {fragment_count} fragments ({source_language} -> {target_language}) "
                    f"in {elapsed:.2f}s with model {metadata.model}")
        return TranslationResult(translated_text, metadata, fragment_count)

    async def _translate_document(
        self,
        document_text: str,
        source_language: str,
        target_language: str,
        progress_callback: Optional[ProgressCallback]
    ):
        root = parse_document(document_text)
        fragments = collect_fragments(root, self.non_translatable_tags)
        logger.info(f"Collected {len(fragments)} translatable fragments "
                    f"(concurrency limit {self.concurrency_limit})")

        async def translate_fn(text: str) -> str:
            return await self.llm_provider.translate_text(text, source_language, target_language)

        outcomes = await dispatch_fragments(
            fragments,
            translate_fn,
            self.concurrency_limit,
            progress_callback=progress_callback
        )
        aggregate_outcomes(outcomes)

        translated = serialize_document(root, xml_declaration=has_xml_declaration(document_text))
        return translated, len(fragments)

    async def _run_with_limits(self, coro, timeout: Optional[float], cancel_event: Optional[asyncio.Event]):
        """Run coro, cancelling it on deadline expiry or when cancel_event is set."""
        if cancel_event is not None and cancel_event.is_set():
            coro.close()
            raise TranslationCancelledError("Translation cancelled before start")

        work = asyncio.ensure_future(coro)
        waiters = {work}
        cancel_waiter = None
        if cancel_event is not None:
            cancel_waiter = asyncio.ensure_future(cancel_event.wait())
            waiters.add(cancel_waiter)

        try:
            done, _ = await asyncio.wait(waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            await self._cancel(work)
            raise
        finally:
            if cancel_waiter is not None and not cancel_waiter.done():
                cancel_waiter.cancel()

        if work in done:
            return work.result()

        await self._cancel(work)
        if cancel_waiter is not None and cancel_waiter in done:
            raise TranslationCancelledError("Translation cancelled by caller")
        raise TranslationTimeoutError(f"Translation timed out after {timeout}s", timeout=timeout)

    @staticmethod
    async def _cancel(task: asyncio.Future) -> None:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.debug(f"Cancelled translation raised {e!r}")
