"""
Exceptions raised by the core document, storage and print layers.
"""


class PDFPrintError(Exception):
    """Base class for all application errors."""


class DocumentLoadError(PDFPrintError):
    """A PDF source is missing, unreadable or not a valid PDF."""

    def __init__(self, source, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load PDF '{source}': {reason}")


class StorageError(PDFPrintError):
    """Creating a directory or writing a file failed."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Storage operation failed for '{path}': {reason}")


class PrintError(PDFPrintError):
    """The document could not be rendered onto the printer."""
