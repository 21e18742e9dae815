"""
Core business logic for PDFPrint.
"""

from .annotations import Annotation, AnnotationManager, AnnotationType
from .document import PDFDocument
from .errors import DocumentLoadError, PDFPrintError, PrintError, StorageError
from .page import PageLayout

__all__ = [
    "Annotation",
    "AnnotationManager",
    "AnnotationType",
    "PDFDocument",
    "PageLayout",
    "PDFPrintError",
    "DocumentLoadError",
    "StorageError",
    "PrintError",
]
