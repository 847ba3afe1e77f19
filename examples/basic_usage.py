"""
Basic usage example for md2marp.

This example shows how to convert a Markdown article into a Marp deck
using the Python API.
"""

from pathlib import Path
from md2marp import Md2MarpPipeline


def main():
    # Initialize pipeline with default settings (Gemini summarization)
    pipeline = Md2MarpPipeline(
        provider="gemini",  # Requires GEMINI_API_KEY
        summarize=True,  # Bullet-point summary per slide
        theme="gaia",  # Marp built-in theme
    )

    # Process the Markdown file
    input_path = Path("examples/article.md")

    result = pipeline.process(input_path=input_path, title="My Talk")

    print("\n✓ Conversion complete!")
    print(f"  Marp: {result['marp']}")
    print(f"  Slides: {result['slides']}")
    print(f"  Unsummarized: {result['failed_slides']}")


if __name__ == "__main__":
    main()
