"""
Heading-based slide segmentation.

Walks the mistune AST of a Markdown document and buckets block content
into slides: every heading of level 1-4 opens a new slide, everything
below it (until the next such heading) becomes the slide body.
"""

import html
from typing import List, Optional, Union
from urllib.parse import unquote

import mistune

from md2marp.models import Slide, DeferredImage, SegmentationResult
from md2marp.parsers.text import (
    Token,
    escape_inline,
    escape_markdown,
    extract_text,
    flatten_title,
    is_qiita_block,
    extract_text_from_qiita_block,
)


# Inline tokens that are emitted on their own instead of as paragraph text
INLINE_ELEMENTS = ("codespan", "link", "image", "inline_html")

# Never part of a paragraph's captured text
NON_TEXT_ELEMENTS = ("image", "inline_html")

TEXT_BLOCKS = ("paragraph", "block_text")

TABLE_ALIGN = {
    None: "---",
    "left": ":---",
    "center": ":---:",
    "right": "---:",
}


class _SegmentState:
    """Mutable state of a single segmentation pass."""

    def __init__(self):
        self.current: Optional[Slide] = None
        self.slides: List[Slide] = []
        self.images: List[DeferredImage] = []
        self.count = 0  # 1-based position of the open slide

    def open_slide(self, title: str) -> None:
        if self.current is not None:
            self.slides.append(self.current)
        self.current = Slide(title=title, content="")
        self.count += 1

    def close(self) -> None:
        if self.current is not None:
            self.slides.append(self.current)
            self.current = None

    def append(self, text: str) -> None:
        if self.current is not None:
            self.current.append(text)

    def defer_image(self, markup: str) -> None:
        if self.current is not None:
            self.images.append(DeferredImage(markup=markup, owner_slide=self.count))


class MarkdownSegmenter:
    """
    Split a Markdown document into slides.

    Whether a token contributes text is decided by its kind: paragraphs,
    list items and table cells capture their text once, inline elements
    (code spans, links, images, raw HTML) are emitted separately, and text
    tokens are never captured on their own.
    """

    MAX_SLIDE_LEVEL = 4
    IMAGE_MARKUP = "\n---\n![bg fit]({url})\n"
    DEFAULT_PLUGINS = ["strikethrough", "table", "url", "task_lists"]

    def __init__(
        self,
        autolink_text: str = "Link",
        plugins: Optional[List[str]] = None,
    ):
        self.autolink_text = autolink_text
        self.plugins = plugins if plugins is not None else list(self.DEFAULT_PLUGINS)
        self.markdown = mistune.create_markdown(renderer="ast", plugins=self.plugins)

    def parse(self, content: Union[str, bytes]) -> List[Token]:
        """Parse Markdown into a mistune token list."""
        return self.markdown(self._decode(content))

    def segment(self, content: Union[str, bytes]) -> SegmentationResult:
        """
        Segment a Markdown document into slides.

        Args:
            content: Markdown text, or raw bytes (UTF-8)

        Returns:
            SegmentationResult with the slides and their deferred images
        """
        tokens = self.parse(content)
        state = _SegmentState()

        try:
            self._walk_blocks(tokens, state)
        except (KeyError, TypeError, AttributeError) as e:
            raise RuntimeError(f"failed to walk AST: {e}") from e

        state.close()

        print(f"[Segmenter] Found {len(state.slides)} slides, {len(state.images)} deferred images")
        return SegmentationResult(slides=state.slides, images=state.images)

    @staticmethod
    def _decode(content: Union[str, bytes]) -> str:
        if isinstance(content, bytes):
            try:
                return content.decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise ValueError(f"Markdown content is not valid UTF-8: {e}") from e
        return content

    # --- Block tokens ---

    def _walk_blocks(self, tokens: List[Token], state: _SegmentState, depth: int = 0) -> None:
        for token in tokens:
            kind = token["type"]

            if kind == "heading":
                self._on_heading(token, state)
            elif kind in TEXT_BLOCKS:
                self._on_paragraph(token, state)
            elif kind == "block_html":
                state.append("\n" + token.get("raw", "").rstrip("\n") + "\n")
            elif kind == "block_code":
                self._on_code_block(token, state)
            elif kind == "list":
                self._on_list(token, state, depth)
            elif kind == "block_quote":
                self._walk_blocks(token.get("children", []), state, depth)
            elif kind == "table":
                self._on_table(token, state)

    def _on_heading(self, token: Token, state: _SegmentState) -> None:
        level = token["attrs"]["level"]
        if level > self.MAX_SLIDE_LEVEL:
            self._on_paragraph(token, state)
            return

        title = flatten_title(extract_text(token, exclude=NON_TEXT_ELEMENTS))
        state.open_slide(title)
        self._emit_images(token.get("children", []), state)

    def _on_paragraph(self, token: Token, state: _SegmentState) -> None:
        if state.current is None:
            return

        text = extract_text(token, exclude=NON_TEXT_ELEMENTS)
        if is_qiita_block(text):
            state.append(escape_markdown(extract_text_from_qiita_block(text)) + "\n")
            return

        if extract_text(token, exclude=INLINE_ELEMENTS).strip():
            state.append(escape_markdown(text) + "\n")
        self._emit_inline(token.get("children", []), state)

    def _on_code_block(self, token: Token, state: _SegmentState) -> None:
        code = token.get("raw", "").rstrip("\n")
        info = (token.get("attrs") or {}).get("info") or ""
        lang = info.split()[0] if info.strip() else ""
        state.append(f"\n```{lang}\n{code}\n```\n")

    def _on_list(self, token: Token, state: _SegmentState, depth: int) -> None:
        attrs = token.get("attrs") or {}
        ordered = attrs.get("ordered", False)
        number = attrs.get("start", 1)

        for item in token.get("children", []):
            if ordered:
                marker = f"{number}."
                number += 1
            else:
                marker = "-"

            if item["type"] == "task_list_item":
                checked = (item.get("attrs") or {}).get("checked", False)
                marker += " [x]" if checked else " [ ]"

            self._on_list_item(item, state, depth, marker)

    def _on_list_item(self, item: Token, state: _SegmentState, depth: int, marker: str) -> None:
        indent = "  " * depth
        hanging = indent + " " * (len(marker) + 1)
        first = True

        for child in item.get("children", []):
            kind = child["type"]

            if kind in TEXT_BLOCKS:
                prefix = f"{indent}{marker} " if first else hanging
                text = escape_markdown(extract_text(child, exclude=NON_TEXT_ELEMENTS).strip())
                fragments = self._inline_fragments(child.get("children", []), state)

                if extract_text(child, exclude=INLINE_ELEMENTS).strip():
                    state.append(prefix + text.replace("\n", "\n" + hanging) + "\n")
                    first = False
                    for fragment in fragments:
                        state.append(fragment)
                elif fragments:
                    # Only links, code spans or HTML: keep them on the bullet line
                    state.append(prefix + " ".join(f.strip("\n") for f in fragments) + "\n")
                    first = False
            elif kind == "list":
                self._on_list(child, state, depth + 1)
            else:
                self._walk_blocks([child], state, depth + 1)

    def _on_table(self, token: Token, state: _SegmentState) -> None:
        if state.current is None:
            return

        rows: List[List[str]] = []
        aligns: List[Optional[str]] = []

        for section in token.get("children", []):
            if section["type"] == "table_head":
                cells = section.get("children", [])
                aligns = [(cell.get("attrs") or {}).get("align") for cell in cells]
                rows.append([self._cell_text(cell) for cell in cells])
            elif section["type"] == "table_body":
                for row in section.get("children", []):
                    rows.append([self._cell_text(cell) for cell in row.get("children", [])])

        if not rows:
            return

        lines = ["| " + " | ".join(rows[0]) + " |"]
        lines.append("| " + " | ".join(TABLE_ALIGN.get(align, "---") for align in aligns) + " |")
        for row in rows[1:]:
            lines.append("| " + " | ".join(row) + " |")

        state.append("\n" + "\n".join(lines) + "\n")

    @staticmethod
    def _cell_text(cell: Token) -> str:
        text = extract_text(cell, exclude=NON_TEXT_ELEMENTS).strip()
        return escape_inline(flatten_title(text)).replace("|", "\\|")

    # --- Inline tokens ---

    def _emit_inline(self, tokens: List[Token], state: _SegmentState) -> None:
        for fragment in self._inline_fragments(tokens, state):
            state.append(fragment)

    def _inline_fragments(self, tokens: List[Token], state: _SegmentState) -> List[str]:
        """Markup for the inline elements under tokens; images are deferred instead."""
        fragments: List[str] = []

        for token in tokens:
            kind = token["type"]

            if kind == "codespan":
                fragments.append(f"`{token.get('raw', '')}`\n")
            elif kind == "inline_html":
                fragments.append("\n" + token.get("raw", ""))
            elif kind == "image":
                state.defer_image(self.IMAGE_MARKUP.format(url=token["attrs"]["url"]))
            elif kind == "link":
                fragments.append(self._link_markup(token, state))
            elif "children" in token:
                fragments.extend(self._inline_fragments(token["children"], state))

        return fragments

    def _emit_images(self, tokens: List[Token], state: _SegmentState) -> None:
        for token in tokens:
            if token["type"] == "image":
                state.defer_image(self.IMAGE_MARKUP.format(url=token["attrs"]["url"]))
            elif "children" in token:
                self._emit_images(token["children"], state)

    def _link_markup(self, token: Token, state: _SegmentState) -> str:
        url = token["attrs"]["url"]

        if self._is_autolink(token):
            return f"\n[{self.autolink_text}]({url})\n"

        anchor = escape_inline(flatten_title(extract_text(token, exclude=NON_TEXT_ELEMENTS)))
        self._emit_images(token.get("children", []), state)
        return f"\n[{anchor}]({url})\n"

    @staticmethod
    def _is_autolink(token: Token) -> bool:
        """A link whose only child is its own URL (`<https://...>` or a bare URL)."""
        children = token.get("children", [])
        if len(children) != 1 or children[0]["type"] != "text":
            return False

        text = html.unescape(children[0].get("raw", ""))
        url = unquote(html.unescape(token["attrs"]["url"]))
        return url in (text, "mailto:" + text)
