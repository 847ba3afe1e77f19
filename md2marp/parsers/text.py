"""
Text helpers for the mistune AST.
"""

import re
from typing import Any, Dict, Iterable, List, Union

Token = Dict[str, Any]

QIITA_MARKER = ":::"

# Inline tokens whose raw text is literal content
_LITERAL_TYPES = ("text", "codespan")
_BREAK_TYPES = ("softbreak", "linebreak")


def extract_text(
    node: Union[Token, List[Token]],
    exclude: Iterable[str] = (),
) -> str:
    """
    Collect the literal text beneath a token, in document order.

    Args:
        node: A mistune AST token or a list of tokens
        exclude: Token types whose subtree is skipped

    Returns:
        Concatenated text (possibly empty)
    """
    excluded = set(exclude)
    parts: List[str] = []

    def walk(tokens: List[Token]) -> None:
        for token in tokens:
            kind = token.get("type")
            if kind in excluded:
                continue
            if kind in _LITERAL_TYPES:
                parts.append(token.get("raw", ""))
            elif kind in _BREAK_TYPES:
                parts.append("\n")
            elif "children" in token:
                walk(token["children"])

    walk(node if isinstance(node, list) else [node])
    return "".join(parts)


def is_qiita_block(text: str) -> bool:
    """Check for Qiita's `:::note` style container markers."""
    return QIITA_MARKER in text.strip()


def extract_text_from_qiita_block(block_text: str) -> str:
    """Drop the `:::` tag lines and keep the enclosed text."""
    lines = []
    for line in block_text.splitlines():
        trimmed = line.strip()
        if trimmed.startswith(QIITA_MARKER):
            continue
        lines.append(trimmed + "\n")
    return "".join(lines)


# Inline markup openers; `_` only counts at a word boundary
_INLINE_SPECIAL = re.compile(r"[\\`*\[\]<~]|(?<![0-9A-Za-z])_|_(?![0-9A-Za-z])")

# Block markers that are only special at the start of a line
_LINE_START_SPECIAL = ("#", ">", "+", "-", "=", "|")
_ORDERED_MARKER = re.compile(r"(\d{1,9})([.)])")


def escape_inline(text: str) -> str:
    """Backslash-escape characters that would open inline markup."""
    return _INLINE_SPECIAL.sub(lambda m: "\\" + m.group(0), text)


def escape_markdown(text: str) -> str:
    """
    Escape plain text so it reads back as the same text when parsed as Markdown.

    mistune resolves backslash escapes while parsing, so text taken from the
    AST has to be escaped again before it is written out as Markdown.
    """
    lines = []
    for line in escape_inline(text).split("\n"):
        body = line.lstrip()
        indent = line[: len(line) - len(body)]
        if body.startswith(_LINE_START_SPECIAL):
            body = "\\" + body
        else:
            m = _ORDERED_MARKER.match(body)
            if m:
                body = m.group(1) + "\\" + body[m.end(1):]
        lines.append(indent + body)
    return "\n".join(lines)


def flatten_title(title: str) -> str:
    """Collapse a title onto one line (setext headings may span several)."""
    return " ".join(title.split())
