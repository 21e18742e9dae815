"""
Controller tying the document view to printing, saving and annotations.
"""
import logging
from collections import deque
from pathlib import Path
from typing import Callable, Deque, List, Optional, Tuple, Union

from PyQt5.QtCore import QObject, QPoint, QPointF, pyqtSignal
from PyQt5.QtWidgets import QDialog, QWidget

from pdfprint.config import AppConfig
from pdfprint.core.annotations import Annotation
from pdfprint.core.document import PDFDocument
from pdfprint.core.errors import DocumentLoadError, PDFPrintError, StorageError
from pdfprint.services import PDF_NAME_FILTER, PrintOutcome, PrintService, PrintStatus, StorageService
from pdfprint.ui.dialogs import AnnotationEditDialog
from pdfprint.ui.widgets import PDFView, TapGestureRecognizer

logger = logging.getLogger(__name__)

DocumentSource = Union[str, Path, bytes]


class DocumentViewerController(QObject):
    """
    Handles every user event of the document viewer.

    Owns the current document and the annotation mode. Services and the
    view are injected so they can be replaced in tests.
    """

    # Signals
    document_changed = pyqtSignal(object)  # PDFDocument
    annotation_mode_changed = pyqtSignal(bool)
    annotation_added = pyqtSignal(object)  # Annotation
    annotation_edited = pyqtSignal(object)  # Annotation
    edit_dialog_opened = pyqtSignal(object)  # AnnotationEditDialog
    document_saved = pyqtSignal(str)  # path
    print_finished = pyqtSignal(object)  # PrintOutcome
    error_occurred = pyqtSignal(str, str)  # title, message

    def __init__(self, pdf_view: PDFView, print_service: PrintService,
                 storage_service: StorageService,
                 config: Optional[AppConfig] = None,
                 parent_widget: Optional[QWidget] = None,
                 dialog_factory: Optional[Callable[[str, Optional[QWidget]], QDialog]] = None):
        super().__init__()
        self.pdf_view = pdf_view
        self.print_service = print_service
        self.storage_service = storage_service
        self.config = config or AppConfig()
        self.parent_widget = parent_widget
        self._dialog_factory = dialog_factory or AnnotationEditDialog

        # State
        self.current_document: Optional[PDFDocument] = None
        self.annotation_mode_enabled: bool = False

        # Only the recognizer installed by annotation mode is ever removed
        self._annotation_tap_recognizer: Optional[TapGestureRecognizer] = None

        # Edit dialogs waiting to be shown, one per matched annotation
        self._pending_edits: Deque[Tuple[PDFDocument, Annotation]] = deque()
        self.active_edit_dialog: Optional[QDialog] = None

        # Double tap editing is always active
        self._double_tap_recognizer = TapGestureRecognizer(taps_required=2, parent=self)
        self._double_tap_recognizer.tapped.connect(self.handle_double_tap)
        self.pdf_view.add_gesture_recognizer(self._double_tap_recognizer)

    # Properties

    @property
    def toggle_label(self) -> str:
        """Text for the annotation toggle control in the current mode."""
        if self.annotation_mode_enabled:
            return self.config.annotation_active_label
        return self.config.annotation_inactive_label

    @property
    def saved_directory(self) -> Path:
        return self.config.saved_directory

    @property
    def saved_file_path(self) -> Path:
        return self.config.saved_file_path

    # Event interface

    def on_print_requested(self) -> None:
        self.print_document()

    def on_save_requested(self) -> None:
        self.save_document()

    def on_browse_requested(self) -> None:
        self.browse_saved_files()

    def on_annotation_toggle_requested(self) -> None:
        self.toggle_annotation_mode()

    def on_document_picked(self, file_path: Optional[str]) -> None:
        """Load the file chosen in the picker; None means the picker was closed."""
        if not file_path:
            logger.info("Document picker closed without a selection")
            return
        self.load_document(file_path)

    def on_print_finished(self, outcome: PrintOutcome) -> None:
        """Report the terminal outcome of a print job."""
        if outcome.status == PrintStatus.COMPLETED:
            logger.info(outcome.message)
        elif outcome.status == PrintStatus.FAILED:
            logger.error(outcome.message)
        else:
            logger.info(outcome.message)
        self.print_finished.emit(outcome)

    # Document

    def load_document(self, source: DocumentSource) -> bool:
        """
        Decode a PDF and show it, replacing the current document.

        On failure the current document stays as it was.

        Args:
            source: Path to a PDF file, or raw PDF bytes

        Returns:
            True if the document was loaded
        """
        try:
            if isinstance(source, (bytes, bytearray)):
                document = PDFDocument.from_bytes(bytes(source))
            else:
                document = PDFDocument.from_path(source)
        except DocumentLoadError as e:
            logger.error("Error loading PDF: %s", e)
            self.error_occurred.emit("Error Loading PDF", str(e))
            return False

        # Edits queued for the old document are dropped with it
        self._cancel_pending_edits()

        previous = self.current_document
        self.current_document = document
        self.pdf_view.set_document(document)

        if previous is not None:
            previous.close()

        logger.info("Loaded %s (%d pages)", document.source or "document", document.page_count)
        self.document_changed.emit(document)
        return True

    def print_document(self) -> bool:
        """
        Send the current document to the print service.

        Returns:
            True if a print job was submitted
        """
        if self.current_document is None:
            logger.warning("Print requested with no document loaded")
            return False

        try:
            data = self.current_document.to_bytes()
        except PDFPrintError as e:
            self.on_print_finished(PrintOutcome.failed(str(e)))
            return False

        self.print_service.submit(data, self.config.print_job_name, self.on_print_finished)
        return True

    def save_document(self) -> Optional[Path]:
        """
        Write the current document to the fixed save location.

        Any file already at that path is overwritten.

        Returns:
            Path written, or None if nothing was saved
        """
        if self.current_document is None:
            logger.debug("Save requested with no document loaded")
            return None

        target = self.saved_file_path
        try:
            data = self.current_document.to_bytes()
            self.storage_service.ensure_directory(self.saved_directory)
            self.storage_service.write_file(target, data)
        except (StorageError, PDFPrintError) as e:
            logger.error("Error saving PDF: %s", e)
            self.error_occurred.emit("Error Saving PDF", str(e))
            return None

        logger.info("PDF saved to: %s", target)
        self.document_saved.emit(str(target))
        return target

    def browse_saved_files(self) -> None:
        """Open the picker on the saved documents directory."""
        try:
            self.storage_service.ensure_directory(self.saved_directory)
        except StorageError as e:
            logger.error("Error opening saved PDFs: %s", e)
            self.error_occurred.emit("Error Opening Saved PDFs", str(e))
            return

        self.storage_service.pick_file(
            self.saved_directory, PDF_NAME_FILTER, self.on_document_picked
        )

    # Annotation mode

    def toggle_annotation_mode(self) -> bool:
        """
        Switch annotation mode on or off.

        Returns:
            The new mode
        """
        self.annotation_mode_enabled = not self.annotation_mode_enabled
        if self.annotation_mode_enabled:
            self._enable_annotation_mode()
        else:
            self._disable_annotation_mode()

        logger.debug("Annotation mode %s", "on" if self.annotation_mode_enabled else "off")
        self.annotation_mode_changed.emit(self.annotation_mode_enabled)
        return self.annotation_mode_enabled

    def _enable_annotation_mode(self) -> None:
        if self._annotation_tap_recognizer is not None:
            return
        recognizer = TapGestureRecognizer(taps_required=1, parent=self)
        recognizer.tapped.connect(self.handle_single_tap)
        self.pdf_view.add_gesture_recognizer(recognizer)
        self._annotation_tap_recognizer = recognizer

    def _disable_annotation_mode(self) -> None:
        recognizer = self._annotation_tap_recognizer
        if recognizer is None:
            return
        self.pdf_view.remove_gesture_recognizer(recognizer)
        recognizer.tapped.disconnect(self.handle_single_tap)
        recognizer.deleteLater()
        self._annotation_tap_recognizer = None

    # Taps

    def handle_single_tap(self, point: QPoint) -> Optional[Annotation]:
        """
        Add a placeholder text annotation at a tapped point.

        Only has an effect while annotation mode is on.

        Args:
            point: Tap position in view coordinates

        Returns:
            The created annotation, or None
        """
        if not self.annotation_mode_enabled or self.current_document is None:
            return None

        page_index = self.pdf_view.page_for_point(point, nearest=True)
        if page_index is None:
            return None

        x, y = self.pdf_view.convert_point_to_page(point, page_index)
        width, height = self.config.annotation_size
        annotation = self.current_document.annotations.add_text_annotation(
            page_index, x, y, width, height, self.config.annotation_placeholder
        )

        self.pdf_view.request_redraw(page_index)
        logger.info("Added annotation on page %d at (%.1f, %.1f)", page_index + 1, x, y)
        self.annotation_added.emit(annotation)
        return annotation

    def handle_double_tap(self, point: QPoint) -> List[Annotation]:
        """
        Open an edit dialog for every annotation under a tapped point.

        Dialogs are shown one after another.

        Args:
            point: Tap position in view coordinates

        Returns:
            The annotations that matched
        """
        document = self.current_document
        if document is None:
            return []

        page_index = self.pdf_view.page_for_point(point, nearest=True)
        if page_index is None:
            return []

        tap = QPointF(point)
        matches = [
            annotation
            for annotation in document.annotations.get_annotations_for_page(page_index)
            if self.pdf_view.convert_rect_to_view(annotation.rect, page_index).contains(tap)
        ]

        self._pending_edits.extend((document, annotation) for annotation in matches)
        if self.active_edit_dialog is None:
            self._open_next_edit_dialog()
        return matches

    # Editing

    def _open_next_edit_dialog(self) -> None:
        if not self._pending_edits:
            self.active_edit_dialog = None
            return

        document, annotation = self._pending_edits.popleft()
        dialog = self._dialog_factory(annotation.contents, self.parent_widget)
        dialog.finished.connect(
            lambda result: self._on_edit_dialog_finished(dialog, document, annotation, result)
        )

        self.active_edit_dialog = dialog
        self.edit_dialog_opened.emit(dialog)
        dialog.open()

    def _on_edit_dialog_finished(self, dialog: QDialog, document: PDFDocument,
                                 annotation: Annotation, result: int) -> None:
        if result == QDialog.Accepted:
            self._apply_edit(document, annotation, dialog.text())

        dialog.deleteLater()
        self.active_edit_dialog = None
        self._open_next_edit_dialog()

    def _apply_edit(self, document: PDFDocument, annotation: Annotation, text: str) -> None:
        if document is not self.current_document:
            logger.debug("Ignoring edit for a document that is no longer shown")
            return

        updated = document.annotations.update_contents(annotation, text)
        if updated is None:
            return

        self.pdf_view.request_redraw(annotation.page_index)
        self.annotation_edited.emit(updated)

    def _cancel_pending_edits(self) -> None:
        self._pending_edits.clear()
        if self.active_edit_dialog is not None:
            self.active_edit_dialog.reject()

    # Lifecycle

    def close_document(self) -> None:
        """Close the current document and clear the view."""
        self._cancel_pending_edits()
        if self.current_document is not None:
            self.pdf_view.set_document(None)
            self.current_document.close()
            self.current_document = None
