"""
Translation extraction from LLM responses.

This module provides utilities for turning a raw model answer into the text
that is written back into the document, handling thinking blocks, enclosing
quotes and the whitespace around the source fragment.
"""

import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

_THINK_BLOCK_RE = re.compile(r'<think>.*?</think>', re.DOTALL | re.IGNORECASE)
# Orphan closing tag </think> (when the server truncates the opening tag)
_ORPHAN_THINK_RE = re.compile(r'^.*?</think>\s*', re.DOTALL | re.IGNORECASE)

_QUOTE_PAIRS = (('"', '"'), ('“', '”'), ('«', '»'), ("'", "'"))


def remove_think_blocks(response: str) -> str:
    """
    Remove all <think>...</think> blocks from response.

    These blocks contain the model's internal reasoning and are never part of
    the translation.

    Args:
        response: Text potentially containing think blocks

    Returns:
        Text with think blocks removed
    """
    response = _THINK_BLOCK_RE.sub('', response)

    before_orphan_removal = response
    response = _ORPHAN_THINK_RE.sub('', response)
    if before_orphan_removal != response:
        logger.debug(
            "Orphan </think> detected - removed %d characters from beginning",
            len(before_orphan_removal) - len(response),
        )
    return response


def _is_quoted(text: str) -> bool:
    return len(text) >= 2 and any(
        text.startswith(opening) and text.endswith(closing) for opening, closing in _QUOTE_PAIRS
    )


def clean_translation_output(response: Optional[str], source_text: str = "") -> str:
    """
    Extract the translation from a raw model answer.

    The prompt wraps the source in double quotes, and models frequently echo
    them back. Enclosing quotes are removed unless the source itself was
    quoted. Leading and trailing whitespace of the source fragment is
    restored so that the surrounding layout of the document is unchanged.

    Args:
        response: Raw LLM response text
        source_text: The fragment that was sent for translation

    Returns:
        Cleaned translation (empty string if the model returned nothing)
    """
    if not response:
        return ""

    text = remove_think_blocks(response).strip()

    stripped_source = source_text.strip()
    if _is_quoted(text) and not _is_quoted(stripped_source):
        text = text[1:-1].strip()

    if not stripped_source:
        return text

    leading_space = source_text[:len(source_text) - len(source_text.lstrip())]
    trailing_space = source_text[len(source_text.rstrip()):]
    return f"{leading_space}{text}{trailing_space}"
