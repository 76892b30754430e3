"""
Exporting Context

Responsibilities:
- Converts processed markup to Markdown and plain text
- Builds element/text node trees for structured (json/ast) export
- Validates export format names

Owns: Export format registry, markup-to-tree conversion
Never: Resolves placeholders or decides what content to keep
"""

from vellum.contexts.exporting.exceptions import UnsupportedExportFormatError
from vellum.contexts.exporting.exporter import (
    SUPPORTED_EXPORT_FORMATS,
    export,
    get_supported_export_formats,
)
from vellum.contexts.exporting.formats import html_to_markdown, html_to_text
from vellum.contexts.exporting.tree import ElementNode, TextNode, to_tree, tree_to_dicts

__all__ = [
    # Format dispatch
    "export",
    "get_supported_export_formats",
    "SUPPORTED_EXPORT_FORMATS",
    "UnsupportedExportFormatError",
    # Converters
    "html_to_markdown",
    "html_to_text",
    # Tree model
    "to_tree",
    "tree_to_dicts",
    "ElementNode",
    "TextNode",
]
