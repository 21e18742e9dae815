"""
Printing of PDF bytes through the Qt print dialog.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

import fitz  # PyMuPDF
from PyQt5.QtCore import QObject, QRect, QThread, Qt, pyqtSignal, pyqtSlot
from PyQt5.QtGui import QImage, QPainter
from PyQt5.QtPrintSupport import QPrintDialog, QPrinter
from PyQt5.QtWidgets import QDialog, QWidget

from pdfprint.core.errors import PrintError

logger = logging.getLogger(__name__)

# Upper bound for the rasterisation resolution of printed pages
MAX_PRINT_DPI = 300


class PrintStatus(Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELED = "canceled"


@dataclass(frozen=True)
class PrintOutcome:
    """Terminal result of a print job."""
    status: PrintStatus
    error: Optional[str] = None

    @classmethod
    def completed(cls) -> "PrintOutcome":
        return cls(PrintStatus.COMPLETED)

    @classmethod
    def failed(cls, error: str) -> "PrintOutcome":
        return cls(PrintStatus.FAILED, error)

    @classmethod
    def canceled(cls) -> "PrintOutcome":
        return cls(PrintStatus.CANCELED)

    @property
    def message(self) -> str:
        if self.status == PrintStatus.COMPLETED:
            return "Printing completed successfully."
        if self.status == PrintStatus.FAILED:
            return f"Printing error: {self.error}"
        return "Printing was canceled."


def render_to_printer(data: bytes, printer: QPrinter,
                      progress: Optional[Callable[[int, int], None]] = None) -> int:
    """
    Rasterise every page of a PDF onto a printer.

    Honours the page range chosen in the print dialog.

    Args:
        data: Raw PDF bytes
        printer: Configured printer (or PDF output)
        progress: Optional callback receiving (pages done, pages total)

    Returns:
        Number of pages printed

    Raises:
        PrintError: If the document cannot be decoded or printing fails
    """
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        raise PrintError(f"Could not decode document: {e}") from e

    try:
        first = 0
        last = doc.page_count - 1
        if printer.fromPage() > 0:
            first = max(printer.fromPage() - 1, 0)
            last = min(printer.toPage() - 1, last)

        if last < first:
            raise PrintError("No pages to print")

        painter = QPainter()
        if not painter.begin(printer):
            raise PrintError("Could not start the print job")

        try:
            zoom = min(printer.resolution(), MAX_PRINT_DPI) / 72.0
            target = painter.viewport()
            total = last - first + 1

            for count, page_index in enumerate(range(first, last + 1)):
                if count > 0 and not printer.newPage():
                    raise PrintError("Printer rejected a new page")

                page = doc.load_page(page_index)
                pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), annots=True)
                samples = pix.samples
                image = QImage(samples, pix.width, pix.height, pix.stride,
                               QImage.Format_RGB888)

                size = image.size().scaled(target.size(), Qt.KeepAspectRatio)
                painter.drawImage(QRect(target.x(), target.y(), size.width(), size.height()), image)

                if progress:
                    progress(count + 1, total)
        finally:
            painter.end()

        return total
    finally:
        doc.close()


class PrintWorker(QThread):
    """Worker thread that renders a print job without freezing the UI."""

    # Signals
    print_finished = pyqtSignal(object)  # PrintOutcome

    def __init__(self, data: bytes, printer: QPrinter):
        super().__init__()
        self.data = data
        self.printer = printer
        self.on_finished: Optional[Callable[[PrintOutcome], None]] = None

    def run(self):
        """Execute the print job in a background thread."""
        try:
            pages = render_to_printer(self.data, self.printer)
        except PrintError as e:
            self.print_finished.emit(PrintOutcome.failed(str(e)))
        except Exception as e:
            logger.exception("Unexpected error while printing")
            self.print_finished.emit(PrintOutcome.failed(str(e)))
        else:
            logger.debug("Printed %d page(s) of %s", pages, self.printer.docName())
            self.print_finished.emit(PrintOutcome.completed())


class PrintService(QObject):
    """Submits documents to the system print workflow."""

    def __init__(self, parent_widget: Optional[QWidget] = None):
        super().__init__()
        self.parent_widget = parent_widget
        self._dialog: Optional[QPrintDialog] = None
        self._workers: List[PrintWorker] = []

    def submit(self, data: bytes, job_name: str,
               on_finished: Callable[[PrintOutcome], None]) -> None:
        """
        Show the print dialog and print the document if accepted.

        `on_finished` is called exactly once, on the main thread, with the
        outcome of the job.

        Args:
            data: Raw PDF bytes
            job_name: Name shown in the print queue
            on_finished: Outcome callback
        """
        printer = QPrinter(QPrinter.HighResolution)
        printer.setDocName(job_name)

        dialog = QPrintDialog(printer, self.parent_widget)
        dialog.setWindowTitle("Print Document")
        dialog.finished.connect(
            lambda result: self._on_dialog_finished(result, dialog, printer, data, on_finished)
        )

        self._dialog = dialog
        dialog.open()

    def _on_dialog_finished(self, result: int, dialog: Optional[QPrintDialog],
                            printer: QPrinter, data: bytes,
                            on_finished: Callable[[PrintOutcome], None]) -> None:
        self._dialog = None
        if dialog is not None:
            dialog.deleteLater()

        if result != QDialog.Accepted:
            on_finished(PrintOutcome.canceled())
            return

        self.start_job(data, printer, on_finished)

    def start_job(self, data: bytes, printer: QPrinter,
                  on_finished: Callable[[PrintOutcome], None]) -> PrintWorker:
        """Print on a worker thread without showing a dialog."""
        worker = PrintWorker(data, printer)
        worker.on_finished = on_finished
        worker.print_finished.connect(self._on_worker_finished)
        worker.finished.connect(self._on_thread_finished)

        self._workers.append(worker)
        worker.start()
        return worker

    @pyqtSlot(object)
    def _on_worker_finished(self, outcome: PrintOutcome):
        worker = self.sender()
        callback = getattr(worker, "on_finished", None)
        if callback is not None:
            callback(outcome)

    @pyqtSlot()
    def _on_thread_finished(self):
        worker = self.sender()
        if worker in self._workers:
            self._workers.remove(worker)
        worker.deleteLater()
