"""
Aggregation of fragment outcomes into a single success or failure
"""
import logging
from typing import List

from .dispatcher import FragmentOutcome
from .exceptions import FragmentTranslationError

logger = logging.getLogger(__name__)

_PREVIEW_LENGTH = 60


def aggregate_outcomes(outcomes: List[FragmentOutcome]) -> None:
    """
    Check that every fragment was translated.

    When several fragments failed, the first one in document order is
    reported and the total number of failures is stored in the error
    context under ``failed_fragments``.

    Raises:
        FragmentTranslationError: If at least one outcome is a failure
    """
    failures = [outcome for outcome in outcomes if not outcome.ok]
    if not failures:
        return

    first = min(failures, key=lambda outcome: outcome.fragment.index)
    fragment = first.fragment
    preview = fragment.text.strip()[:_PREVIEW_LENGTH]

    if len(failures) > 1:
        logger.debug(f"{len(failures)} fragments failed, reporting fragment {fragment.index}")

    raise FragmentTranslationError(
        f"Failed to translate fragment {fragment.index} ('{preview}'): {first.error}",
        fragment_text=fragment.text,
        cause=first.error,
        fragment_index=fragment.index,
        context={
            'failed_fragments': len(failures),
            'total_fragments': len(outcomes),
        }
    ) from first.error
