"""
Command-line interface for md2marp.
"""

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from md2marp import __version__
from md2marp.pipeline import Md2MarpPipeline
from md2marp.renderers import THEMES, THEME_NAMES
from md2marp.summarizers import PROVIDERS
from md2marp.summarizers.batch import DEFAULT_BATCH_SIZE, DEFAULT_BATCH_DELAY

DEFAULT_INPUT = Path("example.md")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="md2marp",
        description="md2marp: Convert a Markdown document into a Marp slide deck",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Summarize every section with Gemini
  md2marp article.md

  # Plain split at headings, no LLM calls
  md2marp article.md --no-summarize

  # Title slide and theme
  md2marp article.md --title "Quarterly Review" --theme gaia-invert

  # Qiita export: drop the article header slide, let the LLM pick a title
  md2marp article.md --drop-leading-slide --generate-title

Environment Variables:
  GEMINI_API_KEY      API key for Gemini summarization
  GEMINI_MODEL        Gemini model (default: gemini-2.0-flash)
  ANTHROPIC_API_KEY   API key for Claude summarization
  ANTHROPIC_MODEL     Claude model
        """,
    )

    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="Input Markdown file (default: example.md)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"md2marp {__version__}",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Output file (default: <input>_marp.md beside the input)",
    )

    parser.add_argument(
        "--title",
        help="Deck title, rendered as a title slide",
    )

    parser.add_argument(
        "--theme",
        help=f"Marp theme name or index: {', '.join(THEME_NAMES)}",
    )

    parser.add_argument(
        "--provider",
        choices=list(PROVIDERS),
        default="gemini",
        help="LLM provider for summarization (default: gemini)",
    )

    parser.add_argument(
        "--no-summarize",
        action="store_true",
        help="Skip LLM summarization and keep the original slide content",
    )

    parser.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_BATCH_SIZE,
        help=f"Slides per summarization batch, max 15 (default: {DEFAULT_BATCH_SIZE})",
    )

    parser.add_argument(
        "--batch-delay",
        type=float,
        default=DEFAULT_BATCH_DELAY,
        help=f"Seconds to wait between batches (default: {DEFAULT_BATCH_DELAY:.0f})",
    )

    parser.add_argument(
        "--generate-title",
        action="store_true",
        help="Generate a deck title with the LLM when --title is not given",
    )

    parser.add_argument(
        "--drop-leading-slide",
        action="store_true",
        help="Drop the first slide (e.g. the header of a Qiita article)",
    )

    parser.add_argument(
        "--list-themes",
        action="store_true",
        help="List available Marp themes and exit",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print tracebacks on error",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    load_dotenv()  # Load .env file if present

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_themes:
        for i, name in enumerate(THEME_NAMES):
            directives = ", ".join(THEMES[name]) or "(marp defaults)"
            print(f"{i}: {name:<18} {directives}")
        return 0

    input_path = args.input
    if input_path is None:
        input_path = DEFAULT_INPUT
        print(f"[INFO] No filename input. Use {DEFAULT_INPUT}")

    if not input_path.exists():
        print(f"Error: Input file not found: {input_path}", file=sys.stderr)
        return 1

    try:
        pipeline = Md2MarpPipeline(
            provider=args.provider,
            summarize=not args.no_summarize,
            batch_size=args.batch_size,
            batch_delay=args.batch_delay,
            theme=args.theme,
            generate_title=args.generate_title,
            drop_leading_slide=args.drop_leading_slide,
        )

        pipeline.process(
            input_path=input_path,
            output_path=args.output,
            title=args.title,
        )

        return 0

    except KeyboardInterrupt:
        print("\n\nInterrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
