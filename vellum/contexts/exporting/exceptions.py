"""Custom exceptions for the exporting context."""

from typing import Iterable


class UnsupportedExportFormatError(ValueError):
    """
    Exception raised when an export format discriminator is not recognized.

    The only hard failure of the template engine.

    Attributes:
        format: The offending format name
        supported: Formats that would have been accepted
    """

    def __init__(self, format: str, supported: Iterable[str]):
        self.format = format
        self.supported = list(supported)
        super().__init__(
            f"Unsupported export format: {format!r}. Supported formats: {', '.join(self.supported)}"
        )
