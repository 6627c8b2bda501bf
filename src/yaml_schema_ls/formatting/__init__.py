"""Formatting exports."""

from .yaml_formatting import FormatError, format_document

__all__ = ["FormatError", "format_document"]
