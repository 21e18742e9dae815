"""
User interface for PDFPrint.
"""
