"""
Marp renderer.

Concatenates slides into a single Marp Markdown document.
"""

from typing import List, Optional, Union

from md2marp.models import Slide
from md2marp.parsers.text import escape_inline, flatten_title


# Front-matter directives per theme, one per line
THEMES = {
    "default": [],
    "default-paginate": ["paginate: true"],
    "gaia": ["theme: gaia"],
    "gaia-invert": ["theme: gaia", "class: invert"],
    "gaia-lead": ["theme: gaia", "class: lead", "paginate: true"],
    "uncover": ["theme: uncover"],
    "uncover-invert": ["theme: uncover", "class: invert"],
}

THEME_NAMES = list(THEMES)

TITLE_STYLE = "<style scoped>section{font-size:50px;text-align:center}</style>"


def heading_text(title: str) -> str:
    """Single-line, escaped heading text that parses back to the same title."""
    text = escape_inline(flatten_title(title))
    if text.endswith("#"):
        # A trailing run of `#` would be read as a closing sequence
        text = text[:-1] + "\\#"
    return text


def resolve_theme(theme: Union[str, int, None]) -> List[str]:
    """
    Look up theme directives by name or by position in THEME_NAMES.

    Numeric strings (e.g. from the CLI) are treated as positions.
    """
    if theme is None or theme == "":
        return []

    if isinstance(theme, str) and theme.isdigit():
        theme = int(theme)

    if isinstance(theme, int):
        if not 0 <= theme < len(THEME_NAMES):
            raise ValueError(f"Unknown theme index: {theme} (0-{len(THEME_NAMES) - 1})")
        return list(THEMES[THEME_NAMES[theme]])

    if theme not in THEMES:
        raise ValueError(f"Unknown theme: {theme}. Available: {', '.join(THEME_NAMES)}")
    return list(THEMES[theme])


class MarpRenderer:
    """Render a slide sequence as Marp-flavoured Markdown."""

    def __init__(self, theme: Union[str, int, None] = None):
        self.theme = theme
        self.directives = resolve_theme(theme)

    def render(self, slides: List[Slide], title: Optional[str] = None) -> str:
        """
        Render slides into one Marp document.

        Args:
            slides: Slides in presentation order
            title: Optional deck title, rendered as a centered title slide

        Returns:
            Marp Markdown text
        """
        parts = ["---\n", "marp: true\n"]
        parts.extend(f"{directive}\n" for directive in self.directives)

        title = heading_text(title or "")
        if title:
            parts.append("---\n")
            parts.append(f"# {title}\n")
            parts.append(f"{TITLE_STYLE}\n\n")

        for slide in slides:
            parts.append(self.render_slide(slide))

        if not slides and not title:
            parts.append("---\n")

        return "".join(parts)

    @staticmethod
    def render_slide(slide: Slide) -> str:
        """Render one slide: separator, heading and body (blank body if empty)."""
        body = slide.content.rstrip("\n")
        return f"---\n# {heading_text(slide.title)}\n\n{body}\n\n"
