"""
Advanced usage examples for md2marp.

Shows how to:
- Split without any LLM calls
- Use Claude instead of Gemini
- Convert a Qiita export with a generated title
- Inspect the segmentation before rendering
"""

from pathlib import Path
from md2marp import Md2MarpPipeline
from md2marp.parsers import MarkdownSegmenter
from md2marp.renderers import MarpRenderer


def example_plain_split():
    """Split at headings only (no API key required)."""
    print("\n[Example 1] Plain split")

    pipeline = Md2MarpPipeline(summarize=False, theme="default-paginate")
    result = pipeline.convert("# Hello\nWorld\n\n## Next\n- a\n- b\n", title="Demo")

    print(result.marp)


def example_with_claude():
    """Summarize with Anthropic Claude."""
    print("\n[Example 2] Claude summarization")

    pipeline = Md2MarpPipeline(
        provider="anthropic",  # Requires ANTHROPIC_API_KEY
        batch_size=10,
        batch_delay=30,
    )

    result = pipeline.process(input_path=Path("examples/article.md"))

    print(f"✓ Marp: {result['marp']}")


def example_qiita_export():
    """Drop the article header slide and let the LLM pick a title."""
    print("\n[Example 3] Qiita export")

    pipeline = Md2MarpPipeline(
        drop_leading_slide=True,  # Qiita exports start with a metadata section
        generate_title=True,
        autolink_text="リンク",
        theme="uncover-invert",
    )

    result = pipeline.process(input_path=Path("examples/qiita_article.md"))

    print(f"✓ Marp: {result['marp']}")


def example_inspect_segmentation():
    """Segment, inspect, then render by hand."""
    print("\n[Example 4] Inspect segmentation")

    segmenter = MarkdownSegmenter()
    result = segmenter.segment(Path("examples/article.md").read_bytes())

    for i, slide in enumerate(result.slides, start=1):
        images = len(result.images_for(i))
        print(f"  {i}. {slide.title} ({len(slide.content)} chars, {images} images)")

    result.attach_images()
    print(MarpRenderer(theme="gaia").render(result.slides))


if __name__ == "__main__":
    # Run examples
    example_plain_split()
    # example_with_claude()
    # example_qiita_export()
    # example_inspect_segmentation()

    print("\nUncomment the example you want to run in advanced_usage.py")
