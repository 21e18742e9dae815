"""
PDF document loading, rendering and serialization.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

import fitz  # PyMuPDF
from PyQt5.QtGui import QImage, QPixmap

from pdfprint.core.annotations.manager import AnnotationManager
from pdfprint.core.errors import DocumentLoadError, PDFPrintError

logger = logging.getLogger(__name__)


class PDFDocument:
    """A decoded PDF document together with the annotations stored in it."""

    def __init__(self, doc: fitz.Document, source: Optional[str] = None):
        self.doc = doc
        self.source = source
        self._annotations: Optional[AnnotationManager] = None

    @classmethod
    def from_path(cls, file_path: Union[str, Path]) -> "PDFDocument":
        """
        Load a PDF document from a file.

        The file is read into memory so the path can be overwritten while
        the document stays open.

        Args:
            file_path: Path to the PDF file

        Returns:
            The decoded document

        Raises:
            DocumentLoadError: If the file is missing or not a valid PDF
        """
        path = Path(file_path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise DocumentLoadError(str(path), e.strerror or str(e)) from e

        return cls.from_bytes(data, source=str(path))

    @classmethod
    def from_bytes(cls, data: bytes, source: Optional[str] = None) -> "PDFDocument":
        """
        Decode a PDF document from raw bytes.

        Args:
            data: Raw PDF file contents
            source: Optional description of where the bytes came from

        Returns:
            The decoded document

        Raises:
            DocumentLoadError: If the bytes are not a valid PDF
        """
        label = source or "<memory>"
        if not data:
            raise DocumentLoadError(label, "file is empty")

        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            raise DocumentLoadError(label, str(e)) from e

        if not doc.is_pdf or doc.page_count == 0:
            doc.close()
            raise DocumentLoadError(label, "document has no pages")

        if doc.needs_pass:
            doc.close()
            raise DocumentLoadError(label, "document is password protected")

        logger.debug("Decoded %s (%d pages)", label, doc.page_count)
        return cls(doc, source)

    @property
    def annotations(self) -> AnnotationManager:
        """Annotation model owned by this document."""
        if self._annotations is None:
            self._annotations = AnnotationManager(self)
        return self._annotations

    @property
    def page_count(self) -> int:
        return self.doc.page_count if not self.doc.is_closed else 0

    @property
    def is_closed(self) -> bool:
        return self.doc.is_closed

    def get_page(self, page_index: int) -> fitz.Page:
        """
        Get a page object for direct operations.

        Raises:
            IndexError: If the page index is out of range
        """
        if not 0 <= page_index < self.page_count:
            raise IndexError(f"page index {page_index} out of range")
        return self.doc.load_page(page_index)

    def get_page_size(self, page_index: int) -> Tuple[float, float]:
        """Get the (width, height) of a page in points."""
        rect = self.get_page(page_index).rect
        return rect.width, rect.height

    def page_sizes(self) -> List[Tuple[float, float]]:
        """Get the sizes of all pages in document order."""
        return [self.get_page_size(i) for i in range(self.page_count)]

    def render_page(self, page_index: int, zoom: float) -> QPixmap:
        """
        Render a single page, annotations included, to a pixmap.

        Args:
            page_index: 0-based index of the page to render
            zoom: Scale factor from points to pixels

        Returns:
            Rendered pixmap
        """
        page = self.get_page(page_index)
        pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), annots=True)
        samples = pix.samples
        img = QImage(samples, pix.width, pix.height, pix.stride, QImage.Format_RGB888)
        return QPixmap.fromImage(img)

    def to_bytes(self) -> bytes:
        """
        Serialize the document, annotations included, to PDF bytes.

        The trailer /ID is left untouched so an unchanged document always
        serializes to the same bytes.

        Raises:
            PDFPrintError: If the document is closed or cannot be written
        """
        if self.doc.is_closed:
            raise PDFPrintError("Document is closed")

        try:
            return self.doc.tobytes(deflate=True, no_new_id=True)
        except Exception as e:
            raise PDFPrintError(f"Could not serialize document: {e}") from e

    def close(self) -> None:
        """Close the underlying document."""
        if not self.doc.is_closed:
            self.doc.close()
        self._annotations = None

    def __repr__(self) -> str:
        return f"PDFDocument(source={self.source!r}, pages={self.page_count})"
