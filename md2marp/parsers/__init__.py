"""
Markdown parsing: text extraction, Qiita block filtering and slide segmentation.

Parsing itself is delegated to mistune (AST renderer, GFM plugins).
"""

from md2marp.parsers.text import (
    extract_text,
    is_qiita_block,
    extract_text_from_qiita_block,
    escape_markdown,
    escape_inline,
    flatten_title,
)
from md2marp.parsers.segmenter import MarkdownSegmenter

__all__ = [
    "extract_text",
    "is_qiita_block",
    "extract_text_from_qiita_block",
    "escape_markdown",
    "escape_inline",
    "flatten_title",
    "MarkdownSegmenter",
]
