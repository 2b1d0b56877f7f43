"""Minimal static site output built on the content index."""

from .build import build_site, render_site
from .render import MarkdownRenderer, Renderer

__all__ = ["MarkdownRenderer", "Renderer", "build_site", "render_site"]
