"""
Custom widgets for PDF viewing and interaction.
"""

from .gestures import TapGestureRecognizer
from .pdf_view import PDFView

__all__ = [
    "PDFView",
    "TapGestureRecognizer",
]
