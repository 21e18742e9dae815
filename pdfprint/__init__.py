"""
PDFPrint - view, print, save and annotate PDF documents.
"""

__version__ = "1.0.0"
