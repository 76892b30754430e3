"""
Export Dispatch

Turns processed markup into one of the supported output representations,
selected by a format name. This is the only place in the system that raises
on bad input from a caller.
"""

from typing import Any, Dict, List, Union

from vellum.contexts.exporting.exceptions import UnsupportedExportFormatError
from vellum.contexts.exporting.formats import html_to_markdown, html_to_text
from vellum.contexts.exporting.logger import _log_error, log_export_result
from vellum.contexts.exporting.tree import TreeNode, to_tree, tree_to_dicts
from vellum.utils.timestamp import now_exact

SUPPORTED_EXPORT_FORMATS = ("html", "markdown", "text", "json", "ast")

ExportResult = Union[str, List[TreeNode], Dict[str, Any]]


def get_supported_export_formats() -> List[str]:
    """Names accepted by export(), as a new list."""
    return list(SUPPORTED_EXPORT_FORMATS)


def export(markup: str, fmt: str = "html") -> ExportResult:
    """
    Convert processed markup to the requested format.

    Args:
        markup: Output of TemplateProcessor.process()
        fmt: One of SUPPORTED_EXPORT_FORMATS

    Returns:
        - "html": markup unchanged
        - "markdown" / "text": converted string
        - "ast": list of top-level TreeNode objects
        - "json": {"type": "ast", "nodes": [...], "timestamp": "...Z"}

    Raises:
        UnsupportedExportFormatError: If fmt is not a supported format
    """
    if fmt == "html":
        result: ExportResult = markup
        summary = f"{len(markup)} chars"
    elif fmt == "markdown":
        result = html_to_markdown(markup)
        summary = f"{len(result)} chars"
    elif fmt == "text":
        result = html_to_text(markup)
        summary = f"{len(result)} chars"
    elif fmt == "ast":
        result = to_tree(markup)
        summary = f"{len(result)} top-level nodes"
    elif fmt == "json":
        nodes = tree_to_dicts(to_tree(markup))
        result = {"type": "ast", "nodes": nodes, "timestamp": now_exact()}
        summary = f"{len(nodes)} top-level nodes"
    else:
        _log_error(f"Unsupported export format: {fmt!r}")
        raise UnsupportedExportFormatError(fmt, SUPPORTED_EXPORT_FORMATS)

    log_export_result(fmt, len(markup), summary)
    return result
