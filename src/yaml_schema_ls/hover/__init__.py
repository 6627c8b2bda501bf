"""Hover exports."""

from .hover_provider import HoverInfo, format_example, hover, render_entry

__all__ = ["HoverInfo", "format_example", "hover", "render_entry"]
