"""
Main orchestration pipeline for md2marp.

Coordinates segmentation, LLM summarization, and Marp rendering.
"""

import time
from pathlib import Path
from typing import Optional, Union, Callable, TYPE_CHECKING

from md2marp.models import ConversionResult, SegmentationResult
from md2marp.parsers import MarkdownSegmenter
from md2marp.renderers import MarpRenderer
from md2marp.summarizers import BaseSummarizer, BatchSummarizer, get_summarizer
from md2marp.summarizers.batch import DEFAULT_BATCH_SIZE, DEFAULT_BATCH_DELAY, MAX_BATCH_SIZE

if TYPE_CHECKING:
    from server.models import ConversionSettings


def output_path_for(input_path: Path) -> Path:
    """`notes.md` -> `notes_marp.md`, written beside the input."""
    input_path = Path(input_path)
    name = input_path.name
    if name.endswith(".md"):
        name = name[: -len(".md")]
    return input_path.with_name(f"{name}_marp.md")


class Md2MarpPipeline:
    """
    End-to-end pipeline for converting a Markdown document into a Marp deck.

    Pipeline stages:
    1. Segmentation: split the document into slides at headings (h1-h4)
    2. (Optional) Summarization: LLM bullet points, batched and rate-limited
    3. Rendering: Marp front matter, optional title slide, one section per slide
    """

    def __init__(
        self,
        provider: str = "gemini",
        summarize: bool = True,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_delay: float = DEFAULT_BATCH_DELAY,
        theme: Union[str, int, None] = None,
        generate_title: bool = False,
        drop_leading_slide: bool = False,
        autolink_text: str = "Link",
        summarizer: Optional[BaseSummarizer] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize pipeline.

        Args:
            provider: "gemini" or "anthropic"
            summarize: Summarize each slide with the LLM (disable for a plain split)
            batch_size: Slides per summarization batch (max 15)
            batch_delay: Seconds to wait between batches
            theme: Marp theme name or index (see THEME_NAMES)
            generate_title: Ask the LLM for a deck title when none is given
            drop_leading_slide: Drop the first slide (e.g. a Qiita article header)
            autolink_text: Anchor text used for bare/auto links
            summarizer: Pre-built summarizer backend (overrides provider)
            sleep: Sleep function used between batches
        """
        if not 1 <= batch_size <= MAX_BATCH_SIZE:
            raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_SIZE}, got {batch_size}")
        if batch_delay < 0:
            raise ValueError(f"batch_delay must be >= 0, got {batch_delay}")

        self.provider = provider
        self.summarize = summarize
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.theme = theme
        self.generate_title = generate_title
        self.drop_leading_slide = drop_leading_slide
        self.sleep = sleep

        # Initialize components
        self.segmenter = MarkdownSegmenter(autolink_text=autolink_text)
        self.renderer = MarpRenderer(theme=theme)
        self._summarizer = summarizer

    @classmethod
    def from_settings(
        cls, settings: "ConversionSettings", summarizer: Optional[BaseSummarizer] = None
    ) -> "Md2MarpPipeline":
        """Build a pipeline from API conversion settings."""
        return cls(
            provider=settings.provider,
            summarize=settings.summarize,
            batch_size=settings.batch_size,
            batch_delay=settings.batch_delay,
            theme=settings.theme,
            generate_title=settings.generate_title,
            drop_leading_slide=settings.drop_leading_slide,
            autolink_text=settings.autolink_text,
            summarizer=summarizer,
        )

    @property
    def summarizer(self) -> BaseSummarizer:
        """The LLM backend, created on first use."""
        if self._summarizer is None:
            self._summarizer = get_summarizer(self.provider)
        return self._summarizer

    def segment(self, content: Union[str, bytes]) -> SegmentationResult:
        """Segment content into slides, applying the leading-slide option."""
        result = self.segmenter.segment(content)
        if self.drop_leading_slide and result.slides:
            print(f"[Segmenter] Dropping leading slide: {result.slides[0].title!r}")
            result = result.drop_leading_slide()
        return result

    def convert(
        self,
        content: Union[str, bytes],
        title: Optional[str] = None,
    ) -> ConversionResult:
        """
        Convert Markdown content into a Marp deck.

        Args:
            content: Markdown text or raw bytes
            title: Deck title; generated by the LLM when empty and enabled

        Returns:
            ConversionResult with the Marp text and summarization report
        """
        # Stage 1: Segment into slides
        print(f"[Stage 1/3] Segmentation")
        result = self.segment(content)

        # Stage 2: Summarize (or just put the images back)
        failed = []
        if self.summarize:
            print(f"\n[Stage 2/3] Summarization with {self.provider}")
            if not title and self.generate_title:
                text = content.decode("utf-8-sig", errors="replace") if isinstance(content, bytes) else content
                print(f"[Stage 2/3] Title is empty. Generating title...")
                title = self.summarizer.generate_title(text)

            batcher = BatchSummarizer(
                self.summarizer,
                batch_size=self.batch_size,
                batch_delay=self.batch_delay,
                sleep=self.sleep,
            )
            outcomes = batcher.summarize(result)
            failed = [outcome.position for outcome in outcomes if not outcome.ok]
        else:
            print(f"\n[Stage 2/3] Summarization skipped")
            result.attach_images()

        # Stage 3: Render Marp
        print(f"\n[Stage 3/3] Rendering Marp ({len(result.slides)} slides)")
        marp = self.renderer.render(result.slides, title=title)

        return ConversionResult(
            marp=marp,
            slide_count=len(result.slides),
            title=title or None,
            failed_slides=failed,
        )

    def process(
        self,
        input_path: Path,
        output_path: Optional[Path] = None,
        title: Optional[str] = None,
    ) -> dict:
        """
        Convert a Markdown file and write the Marp deck beside it.

        Args:
            input_path: Markdown file to convert
            output_path: Output file (default: <input>_marp.md)
            title: Deck title

        Returns:
            Dictionary with the output path and a summary:
            {
                "marp": Path to the Marp file,
                "slides": number of slides,
                "failed_slides": positions left unsummarized
            }
        """
        input_path = Path(input_path)

        if not input_path.exists():
            raise FileNotFoundError(f"Markdown file not found: {input_path}")

        output_path = Path(output_path) if output_path else output_path_for(input_path)

        print(f"\n{'='*60}")
        print(f"md2marp Pipeline")
        print(f"{'='*60}")
        print(f"Input: {input_path}")
        print(f"Output: {output_path}")
        print(f"Summarize: {self.summarize} ({self.provider})")
        print(f"Theme: {self.theme if self.theme is not None else 'default'}")
        print(f"{'='*60}\n")

        content = input_path.read_bytes()
        conversion = self.convert(content, title=title)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(conversion.marp, encoding="utf-8")

        print(f"\n{'='*60}")
        print(f"[SUCCESS] Marp file generated: {output_path}")
        if conversion.failed_slides:
            print(f"Unsummarized slides: {conversion.failed_slides}")
        print(f"{'='*60}\n")

        return {
            "marp": output_path,
            "slides": conversion.slide_count,
            "failed_slides": conversion.failed_slides,
        }
