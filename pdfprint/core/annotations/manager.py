"""
Annotation model backed by the annotations stored in the PDF itself.
"""
import logging
from typing import TYPE_CHECKING, List, Optional

import fitz  # PyMuPDF

from .models import TEXT_ANNOTATION_SUBTYPES, Annotation

if TYPE_CHECKING:
    from pdfprint.core.document import PDFDocument

logger = logging.getLogger(__name__)

TEXT_COLOR = (0, 0, 0)
FILL_COLOR = (1.0, 1.0, 0.8)
FONT_SIZE = 11


class AnnotationManager:
    """Reads and writes the text annotations of one PDF document."""

    def __init__(self, document: "PDFDocument"):
        self.document = document

    def add_text_annotation(self, page_index: int, x: float, y: float,
                            width: float, height: float,
                            contents: str) -> Annotation:
        """
        Append a text annotation to a page.

        Args:
            page_index: 0-based page index
            x: Left edge in page coordinates
            y: Top edge in page coordinates
            width: Width in page points
            height: Height in page points
            contents: Text shown in the annotation

        Returns:
            Snapshot of the created annotation
        """
        page = self.document.get_page(page_index)
        rect = fitz.Rect(x, y, x + width, y + height)

        annot = page.add_freetext_annot(
            rect,
            contents,
            fontsize=FONT_SIZE,
            text_color=TEXT_COLOR,
            fill_color=FILL_COLOR,
        )

        annotation = Annotation.from_pdf_annot(page_index, annot)
        logger.debug("Added annotation %s on page %d", annotation.xref, page_index)
        return annotation

    def get_annotations_for_page(self, page_index: int) -> List[Annotation]:
        """
        Get all text annotations on a page, in stacking order.

        Args:
            page_index: 0-based page index

        Returns:
            List of annotation snapshots
        """
        page = self.document.get_page(page_index)
        return [
            Annotation.from_pdf_annot(page_index, annot)
            for annot in page.annots(types=TEXT_ANNOTATION_SUBTYPES)
        ]

    def get_annotations_at_point(self, page_index: int, x: float,
                                 y: float) -> List[Annotation]:
        """Get every annotation whose bounds contain a page-space point."""
        return [
            ann for ann in self.get_annotations_for_page(page_index)
            if ann.contains(x, y)
        ]

    def update_contents(self, annotation: Annotation,
                        contents: str) -> Optional[Annotation]:
        """
        Overwrite the text of an existing annotation.

        Args:
            annotation: Annotation to edit
            contents: New text

        Returns:
            Updated snapshot, or None if the annotation no longer exists
        """
        page = self.document.get_page(annotation.page_index)
        annot = page.load_annot(annotation.xref)
        if annot is None:
            logger.warning("Annotation %s not found on page %d",
                           annotation.xref, annotation.page_index)
            return None

        annot.set_info(content=contents)
        if annot.type[0] == fitz.PDF_ANNOT_FREE_TEXT:
            # Regenerating the appearance drops styling that is not passed in
            annot.update(fontsize=FONT_SIZE, text_color=TEXT_COLOR,
                         fill_color=FILL_COLOR)
        else:
            annot.update()
        return Annotation.from_pdf_annot(annotation.page_index, annot)

    def get_annotation_count(self) -> int:
        """Get total number of text annotations in the document."""
        return sum(
            len(self.get_annotations_for_page(i))
            for i in range(self.document.page_count)
        )
