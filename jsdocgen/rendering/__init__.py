"""Output renderers for extracted document trees."""

from .markdown import MarkdownRenderer, format_signature, render_json

__all__ = ["MarkdownRenderer", "format_signature", "render_json"]
