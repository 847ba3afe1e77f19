"""
md2marp: Convert Markdown documents into Marp slide decks.

Splits a document into slides at its headings, optionally summarizes each
slide into bullet points with an LLM (Gemini or Claude), and renders the
result as Marp Markdown.
"""

__version__ = "0.1.0"
__author__ = "md2marp Team"

from md2marp.models import Slide, DeferredImage, SegmentationResult, SummaryOutcome, ConversionResult
from md2marp.pipeline import Md2MarpPipeline

__all__ = [
    "Slide",
    "DeferredImage",
    "SegmentationResult",
    "SummaryOutcome",
    "ConversionResult",
    "Md2MarpPipeline",
]
