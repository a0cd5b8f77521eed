"""
Unit tests for outcome aggregation and the exception hierarchy.
"""
import pytest
from lxml import etree

from src.core.llm.exceptions import LLMProviderError
from src.core.xhtml.aggregator import aggregate_outcomes
from src.core.xhtml.dispatcher import FragmentOutcome
from src.core.xhtml.exceptions import (
    XhtmlTranslationError,
    DocumentParseError,
    FragmentTranslationError,
    DocumentSerializationError,
    TranslationCancelledError,
    TranslationTimeoutError,
)
from src.core.xhtml.walker import TextFragment, TEXT_SLOT


def _fragment(text, index):
    return TextFragment(etree.Element("p"), TEXT_SLOT, text, index)


class TestAggregateOutcomes:
    """Tests for aggregate_outcomes."""

    def test_all_successful(self):
        outcomes = [FragmentOutcome(_fragment("a", 0), translated="A"),
                    FragmentOutcome(_fragment("b", 1), translated="B")]
        assert aggregate_outcomes(outcomes) is None

    def test_no_outcomes(self):
        assert aggregate_outcomes([]) is None

    def test_single_failure(self):
        cause = LLMProviderError("server down")
        outcomes = [FragmentOutcome(_fragment("a", 0), translated="A"),
                    FragmentOutcome(_fragment("Hello world", 1), error=cause)]

        with pytest.raises(FragmentTranslationError) as exc_info:
            aggregate_outcomes(outcomes)

        error = exc_info.value
        assert error.fragment_text == "Hello world"
        assert error.fragment_index == 1
        assert error.cause is cause
        assert error.__cause__ is cause
        assert error.context["failed_fragments"] == 1
        assert error.context["total_fragments"] == 2
        assert "server down" in error.message

    def test_first_failure_in_document_order_reported(self):
        late = RuntimeError("late")
        early = RuntimeError("early")
        # Outcome list order does not matter, fragment index does
        outcomes = [FragmentOutcome(_fragment("c", 2), error=late),
                    FragmentOutcome(_fragment("b", 1), translated="B"),
                    FragmentOutcome(_fragment("a", 0), error=early)]

        with pytest.raises(FragmentTranslationError) as exc_info:
            aggregate_outcomes(outcomes)

        assert exc_info.value.cause is early
        assert exc_info.value.fragment_text == "a"
        assert exc_info.value.context["failed_fragments"] == 2


class TestExceptions:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize("error_class", [
        DocumentParseError,
        FragmentTranslationError,
        DocumentSerializationError,
        TranslationCancelledError,
        TranslationTimeoutError,
    ])
    def test_all_derive_from_base(self, error_class):
        assert issubclass(error_class, XhtmlTranslationError)

    def test_timeout_is_a_cancellation(self):
        error = TranslationTimeoutError("too slow", timeout=1.5)
        assert isinstance(error, TranslationCancelledError)
        assert error.timeout == 1.5
        assert error.context == {"timeout": 1.5}

    def test_parse_error_attributes(self):
        original = ValueError("bad markup")
        error = DocumentParseError("cannot parse", original_error=original, content_preview="<p")
        assert error.message == "cannot parse"
        assert error.original_error is original
        assert error.content_preview == "<p"
        assert error.context == {}
        assert str(error) == "cannot parse"
