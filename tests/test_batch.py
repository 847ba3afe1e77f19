"""
Tests for batched slide summarization.
"""

import threading

import pytest
from md2marp.models import Slide, DeferredImage, SegmentationResult
from md2marp.summarizers.base import BaseSummarizer
from md2marp.summarizers.batch import BatchSummarizer, partition_batches


class FakeSummarizer(BaseSummarizer):
    """Echo summarizer that records every prompt it receives."""

    def __init__(self, fail_on=(), response=None):
        super().__init__(prompt_template="{content}")
        self.fail_on = set(fail_on)
        self.response = response
        self.prompts = []
        self._lock = threading.Lock()

    def complete(self, prompt: str) -> str:
        with self._lock:
            self.prompts.append(prompt)
        if prompt in self.fail_on:
            raise RuntimeError("quota exceeded")
        if self.response is not None:
            return self.response
        return f"- summary of {prompt.strip()}\n"


def _result(n: int) -> SegmentationResult:
    return SegmentationResult(
        slides=[Slide(title=f"S{i}", content=f"body {i}\n") for i in range(1, n + 1)]
    )


def test_partition_covers_every_item_in_order():
    """Test batches are contiguous, non-overlapping and complete."""
    items = list(range(40))
    for size in (1, 2, 7, 13, 15):
        batches = partition_batches(items, size)
        assert [x for batch in batches for x in batch] == items
        assert all(1 <= len(batch) <= size for batch in batches)
        assert all(len(batch) == size for batch in batches[:-1])


def test_partition_edge_cases():
    """Test empty input, short input and invalid sizes."""
    assert partition_batches([], 13) == []
    assert partition_batches([1, 2], 13) == [[1, 2]]
    assert partition_batches(list(range(26)), 13) == [list(range(13)), list(range(13, 26))]

    with pytest.raises(ValueError):
        partition_batches([1], 0)
    with pytest.raises(ValueError):
        partition_batches([1], 16)


def test_summarize_replaces_content():
    """Test every slide content is replaced by its summary."""
    result = _result(3)
    sleeps = []

    outcomes = BatchSummarizer(FakeSummarizer(), sleep=sleeps.append).summarize(result)

    assert [outcome.position for outcome in outcomes] == [1, 2, 3]
    assert all(outcome.ok for outcome in outcomes)
    assert [slide.content for slide in result.slides] == [
        "- summary of body 1\n",
        "- summary of body 2\n",
        "- summary of body 3\n",
    ]
    # Single batch: no rate-limit pause
    assert sleeps == []


def test_sleep_between_batches_only():
    """Test the fixed delay runs between batches but not after the last."""
    result = _result(7)
    sleeps = []

    BatchSummarizer(FakeSummarizer(), batch_size=3, batch_delay=62.0, sleep=sleeps.append).summarize(result)

    assert sleeps == [62.0, 62.0]


def test_failed_slide_left_unchanged():
    """Test a failing request leaves that slide's content as it was."""
    result = _result(3)
    summarizer = FakeSummarizer(fail_on={"body 2\n"})

    outcomes = BatchSummarizer(summarizer, sleep=lambda s: None).summarize(result)

    assert [outcome.ok for outcome in outcomes] == [True, False, True]
    assert "quota exceeded" in outcomes[1].error
    assert result.slides[1].content == "body 2\n"
    assert result.slides[0].content == "- summary of body 1\n"


def test_images_attached_after_their_batch():
    """Test an image under slide 2 appears only once slide 2's batch is done."""
    result = _result(3)
    result.images = [DeferredImage(markup="\n---\n![bg fit](chart.png)\n", owner_slide=2)]
    snapshots = []

    def sleep(seconds):
        snapshots.append([slide.content for slide in result.slides])

    summarizer = FakeSummarizer()
    BatchSummarizer(summarizer, batch_size=1, batch_delay=1.0, sleep=sleep).summarize(result)

    # After batch 1, slide 2 is untouched
    assert snapshots[0][1] == "body 2\n"
    # After batch 2, slide 2 holds its summary followed by the image slide
    assert snapshots[1][1] == "- summary of body 2\n\n---\n![bg fit](chart.png)\n\n"
    # The model never sees image markup, and the image is attached once
    assert all("chart.png" not in prompt for prompt in summarizer.prompts)
    assert result.slides[1].content.count("chart.png") == 1
    assert "chart.png" not in result.slides[0].content + result.slides[2].content


def test_empty_summary_kept():
    """Test a blank summary still replaces the content."""
    result = _result(1)
    BatchSummarizer(FakeSummarizer(response="  "), sleep=lambda s: None).summarize(result)
    assert result.slides[0].content == "  \n"


def test_no_slides():
    """Test summarizing an empty result is a no-op."""
    sleeps = []
    outcomes = BatchSummarizer(FakeSummarizer(), sleep=sleeps.append).summarize(SegmentationResult())
    assert outcomes == []
    assert sleeps == []


def test_invalid_settings():
    """Test batch size and delay validation."""
    with pytest.raises(ValueError):
        BatchSummarizer(FakeSummarizer(), batch_size=20)
    with pytest.raises(ValueError):
        BatchSummarizer(FakeSummarizer(), batch_delay=-1)


class BarrierSummarizer(BaseSummarizer):
    """Holds every request until the whole batch has been sent."""

    def __init__(self, batch_size: int):
        super().__init__(prompt_template="{content}")
        self.barrier = threading.Barrier(batch_size, timeout=5)
        self.events = []
        self._lock = threading.Lock()

    def complete(self, prompt: str) -> str:
        with self._lock:
            self.events.append(("start", prompt.strip()))
        self.barrier.wait()
        with self._lock:
            self.events.append(("end", prompt.strip()))
        return f"- {prompt.strip()}\n"


def test_requests_in_a_batch_run_concurrently():
    """Test a batch's requests are in flight together and the next batch waits for the join."""
    result = _result(6)
    summarizer = BarrierSummarizer(batch_size=3)

    def sleep(seconds):
        summarizer.events.append(("sleep", seconds))

    outcomes = BatchSummarizer(summarizer, batch_size=3, batch_delay=1.0, sleep=sleep).summarize(result)

    # A sequential batch would break the barrier and fail every request
    assert all(outcome.ok for outcome in outcomes)
    assert [slide.content for slide in result.slides] == [f"- body {i}\n" for i in range(1, 7)]

    first = {f"body {i}" for i in (1, 2, 3)}
    events = summarizer.events
    pause = events.index(("sleep", 1.0))

    # Every batch 1 request returned before the pause, batch 2 started after it
    assert {prompt for kind, prompt in events[:pause] if kind == "end"} == first
    assert {prompt for kind, prompt in events[pause + 1:] if kind == "start"} == {"body 4", "body 5", "body 6"}
