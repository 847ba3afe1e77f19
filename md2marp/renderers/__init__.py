"""
Renderers for generating Marp slide decks.
"""

from md2marp.renderers.marp_renderer import MarpRenderer, THEMES, THEME_NAMES, resolve_theme

__all__ = ["MarpRenderer", "THEMES", "THEME_NAMES", "resolve_theme"]
