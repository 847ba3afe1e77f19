"""
Batched, rate-limited slide summarization.

Slides are summarized in fixed-size batches: every slide of a batch is
sent concurrently, the batch is joined, and the next batch waits out a
fixed delay so the requests per minute stay under the API's free-tier limit.
"""

import math
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, List, Sequence, TypeVar

from md2marp.models import SegmentationResult, Slide, SummaryOutcome
from md2marp.summarizers.base import BaseSummarizer

T = TypeVar("T")

MAX_BATCH_SIZE = 15
DEFAULT_BATCH_SIZE = 13  # 15 is the hard limit, 13 leaves room for clock drift
DEFAULT_BATCH_DELAY = 62.0  # seconds; one minute window plus a margin


def partition_batches(items: Sequence[T], batch_size: int = DEFAULT_BATCH_SIZE) -> List[List[T]]:
    """
    Split items into contiguous, non-overlapping batches.

    Args:
        items: Slides (or anything) in document order
        batch_size: Maximum batch length, 1..MAX_BATCH_SIZE

    Returns:
        Batches in order; the last one may be shorter
    """
    if not 1 <= batch_size <= MAX_BATCH_SIZE:
        raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_SIZE}, got {batch_size}")

    count = math.ceil(len(items) / batch_size)
    return [list(items[i * batch_size:(i + 1) * batch_size]) for i in range(count)]


class BatchSummarizer:
    """
    Summarize every slide of a SegmentationResult in rate-limited batches.

    Each request runs in its own worker and returns a SummaryOutcome; slide
    contents are only written on the calling thread, after the batch join.
    """

    def __init__(
        self,
        summarizer: BaseSummarizer,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_delay: float = DEFAULT_BATCH_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if not 1 <= batch_size <= MAX_BATCH_SIZE:
            raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_SIZE}, got {batch_size}")
        if batch_delay < 0:
            raise ValueError(f"batch_delay must be >= 0, got {batch_delay}")

        self.summarizer = summarizer
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.sleep = sleep

    def summarize(self, result: SegmentationResult) -> List[SummaryOutcome]:
        """
        Summarize all slides in place and re-attach their deferred images.

        Args:
            result: Segmentation output; slide contents are replaced

        Returns:
            One SummaryOutcome per slide, in slide order
        """
        positions = list(range(1, len(result.slides) + 1))
        batches = partition_batches(positions, self.batch_size)
        outcomes: List[SummaryOutcome] = []

        print(f"[Summarize] {len(result.slides)} slides in {len(batches)} batches of <= {self.batch_size}")

        for j, batch in enumerate(batches):
            print(f"\n[Batch {j + 1}/{len(batches)}] Sending {len(batch)} slides")

            batch_outcomes = self._run_batch(batch, result.slides)
            for outcome in batch_outcomes:
                slide = result.slides[outcome.position - 1]
                if outcome.ok:
                    slide.content = outcome.text.rstrip("\n") + "\n"
                else:
                    print(f"[ERROR] at index: {outcome.position}\n{outcome.error}")
            outcomes.extend(batch_outcomes)

            attached = result.attach_images(batch)
            if attached:
                print(f"[Batch {j + 1}/{len(batches)}] Re-attached {attached} images")

            if j != len(batches) - 1:
                print(f"[Batch {j + 1}/{len(batches)}] Waiting {self.batch_delay:.0f}s for rate limit")
                self.sleep(self.batch_delay)

        failed = [outcome.position for outcome in outcomes if not outcome.ok]
        if failed:
            print(f"[Summarize] {len(failed)} slides left unsummarized: {failed}")

        return outcomes

    def _run_batch(self, positions: List[int], slides: List[Slide]) -> List[SummaryOutcome]:
        """Send one request per slide concurrently and join on all of them."""
        outcomes = []

        with ThreadPoolExecutor(max_workers=len(positions)) as pool:
            futures = {
                pool.submit(self._summarize_one, position, slides[position - 1].content): position
                for position in positions
            }
            for future in as_completed(futures):
                outcomes.append(future.result())

        return sorted(outcomes, key=lambda outcome: outcome.position)

    def _summarize_one(self, position: int, content: str) -> SummaryOutcome:
        print(f"[send] index: {position}")
        try:
            text = self.summarizer.summarize(content)
        except Exception as e:
            return SummaryOutcome(position=position, error=f"{type(e).__name__}: {e}")
        return SummaryOutcome(position=position, text=text)
