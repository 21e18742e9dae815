"""
Main application window for PDFPrint.
"""

import logging
from pathlib import Path
from typing import List, Optional

from PyQt5.QtCore import QSize, Qt
from PyQt5.QtGui import QIcon
from PyQt5.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QMainWindow,
    QMessageBox,
    QSizePolicy,
    QStyle,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from pdfprint.config import AppConfig
from pdfprint.controllers import DocumentViewerController, UserInputHandler
from pdfprint.services import PrintOutcome, PrintService, PrintStatus, StorageService
from pdfprint.styles import ThemeManager
from pdfprint.ui.widgets import PDFView
from pdfprint.utils import get_resource_path, resource_exists

logger = logging.getLogger(__name__)

STATUS_TIMEOUT_MS = 5000


class MainWindow(QMainWindow):
    """Single-screen document viewer with print, save, browse and annotate tools."""

    def __init__(self, file_path: Optional[str] = None,
                 config: Optional[AppConfig] = None,
                 print_service: Optional[PrintService] = None,
                 storage_service: Optional[StorageService] = None):
        super().__init__()
        self.config = config or AppConfig.from_env()

        # Setup UI
        self._setup_window()
        self._setup_ui()

        # Initialize controllers
        self._init_controllers(print_service, storage_service)
        self._setup_connections()

        # Apply theme
        ThemeManager.apply_theme(self)

        self._load_initial_document(file_path)

    def _setup_window(self):
        """Setup main window properties."""
        self.setWindowTitle("PDFPrint")
        self.setMinimumSize(480, 600)

    def _setup_ui(self):
        """Setup the user interface."""
        self.pdf_view = PDFView(self)
        self._create_toolbar()

        main_layout = QVBoxLayout()
        main_layout.setSpacing(0)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.addWidget(self.top_frame)
        main_layout.addWidget(self.pdf_view)

        container = QWidget()
        container.setLayout(main_layout)
        self.setCentralWidget(container)

    def _create_toolbar(self):
        """Create the top toolbar with four equally sized buttons."""
        self.top_frame = QFrame()
        self.top_frame.setObjectName("TopFrame")
        self.top_frame.setFixedHeight(50)
        self.top_layout = QHBoxLayout(self.top_frame)
        self.top_layout.setContentsMargins(8, 4, 8, 4)
        self.top_layout.setSpacing(8)

        self.toolbar_buttons: List[QToolButton] = []

        self.print_button = self._add_toolbar_button(
            "document-print", QStyle.SP_FileIcon, "Print (Ctrl+P)"
        )
        self.save_button = self._add_toolbar_button(
            "document-save", QStyle.SP_DialogSaveButton, "Save PDF (Ctrl+S)"
        )
        self.browse_button = self._add_toolbar_button(
            "folder-open", QStyle.SP_DirOpenIcon, "Saved PDFs (Ctrl+O)"
        )
        self.annotation_toggle_button = self._add_toolbar_button(
            "document-edit", QStyle.SP_FileDialogContentsView, "Toggle annotation mode"
        )
        self.annotation_toggle_button.setCheckable(True)
        self.annotation_toggle_button.setToolButtonStyle(Qt.ToolButtonTextBesideIcon)
        self.annotation_toggle_button.setText(self.config.annotation_inactive_label)

    def _add_toolbar_button(self, theme_icon: str, fallback_icon: QStyle.StandardPixmap,
                            tooltip: str) -> QToolButton:
        """Add a button to the toolbar."""
        btn = QToolButton(self.top_frame)
        btn.setIcon(QIcon.fromTheme(theme_icon, self.style().standardIcon(fallback_icon)))
        btn.setIconSize(QSize(20, 20))
        btn.setToolTip(tooltip)
        btn.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.top_layout.addWidget(btn)
        self.toolbar_buttons.append(btn)
        return btn

    def _init_controllers(self, print_service: Optional[PrintService],
                          storage_service: Optional[StorageService]):
        """Initialize services and the document controller."""
        self.print_service = print_service or PrintService(self)
        self.storage_service = storage_service or StorageService(self)

        self.controller = DocumentViewerController(
            pdf_view=self.pdf_view,
            print_service=self.print_service,
            storage_service=self.storage_service,
            config=self.config,
            parent_widget=self,
        )
        self.input_handler = UserInputHandler(self.controller)

    def _setup_connections(self):
        """Setup signal/slot connections."""
        self.print_button.clicked.connect(self.controller.on_print_requested)
        self.save_button.clicked.connect(self.controller.on_save_requested)
        self.browse_button.clicked.connect(self.controller.on_browse_requested)
        self.annotation_toggle_button.clicked.connect(
            self.controller.on_annotation_toggle_requested
        )

        self.controller.annotation_mode_changed.connect(self._on_annotation_mode_changed)
        self.controller.document_changed.connect(self._on_document_changed)
        self.controller.document_saved.connect(self._on_document_saved)
        self.controller.print_finished.connect(self._on_print_finished)
        self.controller.error_occurred.connect(self._show_error)

    def _load_initial_document(self, file_path: Optional[str]):
        """Load the document from the command line, or the bundled one."""
        if file_path:
            self.controller.load_document(file_path)
            return

        if resource_exists(self.config.bundled_document):
            self.controller.load_document(get_resource_path(self.config.bundled_document))
        else:
            logger.warning("Bundled document %s not found", self.config.bundled_document)

    # Controller Signal Handlers

    def _on_annotation_mode_changed(self, enabled: bool):
        self.annotation_toggle_button.setText(self.controller.toggle_label)
        self.annotation_toggle_button.setChecked(enabled)
        self.pdf_view.viewport().setCursor(Qt.CrossCursor if enabled else Qt.ArrowCursor)

    def _on_document_changed(self, document):
        name = Path(document.source).name if document.source else "Untitled"
        self.setWindowTitle(f"{name} - PDFPrint")

    def _on_document_saved(self, path: str):
        self.statusBar().showMessage(f"PDF saved to: {path}", STATUS_TIMEOUT_MS)

    def _on_print_finished(self, outcome: PrintOutcome):
        self.statusBar().showMessage(outcome.message, STATUS_TIMEOUT_MS)
        if outcome.status == PrintStatus.FAILED:
            self._show_error("Print Failed", outcome.message)

    def _show_error(self, title: str, message: str):
        """Show an error without blocking the event loop."""
        box = QMessageBox(QMessageBox.Warning, title, message, QMessageBox.Ok, self)
        box.setAttribute(Qt.WA_DeleteOnClose)
        box.open()
        self.last_error_box = box

    # Event Handlers

    def keyPressEvent(self, event):  # type: ignore[override]
        """Handle keyboard shortcuts."""
        if not self.input_handler.handle_key_press(event):
            super().keyPressEvent(event)

    def closeEvent(self, event):  # type: ignore[override]
        """Release the document before the window goes away."""
        self.controller.close_document()
        event.accept()
