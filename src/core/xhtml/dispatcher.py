"""
Bounded concurrent dispatch of fragment translations

A fixed pool of worker tasks pulls fragments from a shared queue, so at most
``concurrency_limit`` capability calls are in flight at any time regardless
of the number of fragments. Each worker writes its translation directly into
the fragment's own text slot; fragments never share a slot, so the tree is
updated without locking.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional

from .constants import DEFAULT_CONCURRENCY_LIMIT
from .walker import TextFragment

logger = logging.getLogger(__name__)

TranslateFn = Callable[[str], Awaitable[str]]
ProgressCallback = Callable[[int, int], None]


@dataclass
class FragmentOutcome:
    """Result of translating one fragment: a translation or the error raised."""
    fragment: TextFragment
    translated: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def validate_concurrency_limit(concurrency_limit) -> int:
    # bool is an int subclass but never a meaningful limit
    if isinstance(concurrency_limit, bool) or not isinstance(concurrency_limit, int):
        raise ValueError(f"concurrency_limit must be a positive integer, got {concurrency_limit!r}")
    if concurrency_limit <= 0:
        raise ValueError(f"concurrency_limit must be a positive integer, got {concurrency_limit}")
    return concurrency_limit


async def dispatch_fragments(
    fragments: List[TextFragment],
    translate_fn: TranslateFn,
    concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT,
    progress_callback: Optional[ProgressCallback] = None
) -> List[FragmentOutcome]:
    """
    Translate every fragment with at most ``concurrency_limit`` calls in flight.

    A failing fragment does not stop the others: every fragment is attempted
    and every worker is joined before returning. Cancelling the caller
    cancels all workers.

    Args:
        fragments: Fragments to translate (from collect_fragments)
        translate_fn: Async callable mapping original text to its translation
        concurrency_limit: Maximum number of concurrent translate_fn calls
        progress_callback: Optional callback(completed, total) after each fragment

    Returns:
        One outcome per fragment, in fragment order

    Raises:
        ValueError: If concurrency_limit is not a positive integer
    """
    limit = validate_concurrency_limit(concurrency_limit)
    total = len(fragments)
    outcomes: List[Optional[FragmentOutcome]] = [None] * total

    if total == 0:
        return []

    queue: asyncio.Queue = asyncio.Queue()
    for position, fragment in enumerate(fragments):
        queue.put_nowait((position, fragment))

    completed = 0

    async def worker(worker_id: int) -> None:
        nonlocal completed
        while True:
            try:
                position, fragment = queue.get_nowait()
            except asyncio.QueueEmpty:
                return

            try:
                translated = await translate_fn(fragment.text)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.debug(f"Fragment {fragment.index} failed in worker {worker_id}: {e}")
                outcomes[position] = FragmentOutcome(fragment, error=e)
            else:
                fragment.write(translated)
                outcomes[position] = FragmentOutcome(fragment, translated=translated)
                logger.debug(f"Fragment {fragment.index} translated by worker {worker_id}")

            completed += 1
            if progress_callback:
                progress_callback(completed, total)

    workers = [asyncio.ensure_future(worker(i)) for i in range(min(limit, total))]
    try:
        await asyncio.gather(*workers)
    finally:
        # No worker outlives this call
        for task in workers:
            if not task.done():
                task.cancel()
        await asyncio.gather(*workers, return_exceptions=True)

    return outcomes
