"""
Scrollable view that renders every page of a PDF document.
"""

import logging
from typing import List, Optional, Tuple

from PyQt5.QtCore import QPoint, QRectF, Qt, QTimer
from PyQt5.QtWidgets import QLabel, QScrollArea, QWidget

from pdfprint.core.document import PDFDocument
from pdfprint.core.page import PageLayout, Rect
from pdfprint.ui.widgets.gestures import TapGestureRecognizer

logger = logging.getLogger(__name__)


class PDFView(QScrollArea):
    """
    Displays a PDF document and answers geometry queries against it.

    Points passed to and returned from the public methods are in viewport
    coordinates, the coordinates mouse events on the viewport carry.
    """

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self._document: Optional[PDFDocument] = None
        self.layout_info = PageLayout(margin=10.0, spacing=10.0)
        self.auto_scales = True

        self._page_labels: List[QLabel] = []
        self._recognizers: List[TapGestureRecognizer] = []

        self.page_container = QWidget()
        self.page_container.setObjectName("PageContainer")
        self.setWidget(self.page_container)
        self.setWidgetResizable(False)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAsNeeded)

        # Re-fit after resizing has settled
        self._resize_timer = QTimer(self)
        self._resize_timer.setSingleShot(True)
        self._resize_timer.setInterval(100)
        self._resize_timer.timeout.connect(self._on_resize_settled)

    # Document

    def document(self) -> Optional[PDFDocument]:
        return self._document

    def set_document(self, document: Optional[PDFDocument]) -> None:
        """
        Show a document, replacing the current one.

        With auto_scales on, the pages are scaled to fit the viewport width.
        """
        self._document = document

        if document is None:
            self.layout_info.set_page_sizes([])
        else:
            self.layout_info.set_page_sizes(document.page_sizes())
            if self.auto_scales:
                self.layout_info.set_scale(self.layout_info.fit_scale(self.viewport().width()))

        self._rebuild_pages()
        self.verticalScrollBar().setValue(0)
        self.horizontalScrollBar().setValue(0)

    @property
    def scale_factor(self) -> float:
        return self.layout_info.scale

    def set_scale_factor(self, scale: float) -> None:
        """Set the zoom explicitly; turns auto-scaling off."""
        self.auto_scales = False
        self._apply_scale(scale)

    def _apply_scale(self, scale: float) -> None:
        if abs(scale - self.layout_info.scale) < 1e-3:
            return
        self.layout_info.set_scale(scale)
        self._rebuild_pages()

    # Rendering

    def _rebuild_pages(self) -> None:
        """Recreate page labels for the current document and layout."""
        for label in self._page_labels:
            label.hide()
            label.setParent(None)
            label.deleteLater()
        self._page_labels = []

        width, height = self.layout_info.content_size()
        self.page_container.resize(int(width), int(height))

        if self._document is None:
            return

        for page_index in range(self.layout_info.page_count):
            label = QLabel(self.page_container)
            label.setObjectName("PageLabel")
            label.setAttribute(Qt.WA_TransparentForMouseEvents)
            x, y, w, h = self.layout_info.page_rect(page_index)
            label.setGeometry(int(x), int(y), int(w), int(h))
            label.show()
            self._page_labels.append(label)
            self._render_page(page_index)

    def _render_page(self, page_index: int) -> None:
        label = self._page_labels[page_index]
        try:
            pixmap = self._document.render_page(page_index, self.layout_info.scale)
        except Exception:
            logger.exception("Error rendering page %d", page_index + 1)
            return
        label.setPixmap(pixmap)
        label.setScaledContents(True)

    def request_redraw(self, page_index: Optional[int] = None) -> None:
        """
        Re-render pages so annotation changes become visible.

        Args:
            page_index: Page to refresh, or None for every page
        """
        if self._document is None:
            return

        if page_index is None:
            indices = range(len(self._page_labels))
        elif 0 <= page_index < len(self._page_labels):
            indices = [page_index]
        else:
            return

        for index in indices:
            self._render_page(index)
        self.viewport().update()

    # Geometry

    def _to_content(self, point: QPoint) -> Tuple[float, float]:
        return (point.x() + self.horizontalScrollBar().value(),
                point.y() + self.verticalScrollBar().value())

    def _from_content(self, x: float, y: float) -> Tuple[float, float]:
        return (x - self.horizontalScrollBar().value(),
                y - self.verticalScrollBar().value())

    def page_for_point(self, point: QPoint, nearest: bool = True) -> Optional[int]:
        """
        Find the page under a viewport point.

        Args:
            point: Point in viewport coordinates
            nearest: Resolve to the closest page when the point is between
                or outside pages

        Returns:
            0-based page index, or None if no document is shown
        """
        if self._document is None:
            return None
        x, y = self._to_content(point)
        return self.layout_info.page_at(x, y, nearest=nearest)

    def convert_point_to_page(self, point: QPoint, page_index: int) -> Tuple[float, float]:
        """Convert a viewport point into the coordinates of a page."""
        x, y = self._to_content(point)
        return self.layout_info.view_to_page(x, y, page_index)

    def convert_rect_to_view(self, rect: Rect, page_index: int) -> QRectF:
        """Convert a page-space (x, y, width, height) rect into viewport coordinates."""
        x, y, w, h = self.layout_info.page_rect_to_view(rect, page_index)
        vx, vy = self._from_content(x, y)
        return QRectF(vx, vy, w, h)

    # Gestures

    def add_gesture_recognizer(self, recognizer: TapGestureRecognizer) -> None:
        """Attach a tap recognizer to the viewport."""
        if recognizer in self._recognizers:
            return
        recognizer.attach(self.viewport())
        self._recognizers.append(recognizer)

    def remove_gesture_recognizer(self, recognizer: TapGestureRecognizer) -> None:
        """Detach a tap recognizer; other recognizers are left alone."""
        if recognizer not in self._recognizers:
            return
        recognizer.detach()
        self._recognizers.remove(recognizer)

    def gesture_recognizers(self) -> List[TapGestureRecognizer]:
        return list(self._recognizers)

    # Events

    def resizeEvent(self, event):  # type: ignore[override]
        super().resizeEvent(event)
        if self.auto_scales and self._document is not None:
            self._resize_timer.start()

    def _on_resize_settled(self):
        if self.auto_scales and self._document is not None:
            self._apply_scale(self.layout_info.fit_scale(self.viewport().width()))
