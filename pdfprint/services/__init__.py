"""
Platform services used by the document controller.
"""
from .print_service import PrintOutcome, PrintService, PrintStatus, PrintWorker, render_to_printer
from .storage_service import PDF_NAME_FILTER, StorageService

__all__ = [
    'PrintOutcome',
    'PrintService',
    'PrintStatus',
    'PrintWorker',
    'render_to_printer',
    'PDF_NAME_FILTER',
    'StorageService',
]
