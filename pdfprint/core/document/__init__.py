"""
PDF document handling.
"""
from .pdf_document import PDFDocument

__all__ = ['PDFDocument']
