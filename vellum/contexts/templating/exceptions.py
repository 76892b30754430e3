"""Custom exceptions for the templating context."""

from typing import Optional

from vellum.utils.text_processing import truncate_display


class TemplateProcessingError(Exception):
    """
    Exception raised when a pipeline stage fails unexpectedly.

    Unresolved placeholders, malformed marker pairs and odd value types never
    raise; this wraps genuine failures (e.g. a data mapping whose lookups raise)
    with the stage that hit them.

    Attributes:
        message: Error description
        stage_name: Name of the pipeline stage that failed
        snippet: Start of the text the stage was processing
        original_error: The underlying exception
    """

    def __init__(
        self,
        message: str,
        stage_name: Optional[str] = None,
        snippet: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.stage_name = stage_name
        self.snippet = snippet
        self.original_error = original_error

        # Build enhanced error message
        parts = [message]

        if stage_name:
            parts.append(f"\nStage: {stage_name}")

        if snippet:
            parts.append(f"\nInput:\n{truncate_display(snippet, 200)}")

        if original_error:
            parts.append(f"\nOriginal error: {original_error!r}")

        super().__init__("\n".join(parts))


class InvalidTemplateOptionsError(ValueError):
    """
    Exception raised when processor options are invalid.

    Raised at construction time (bad delimiters, unknown option keys in a
    preset), never while processing a template.
    """

    pass
