from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import fitz  # PyMuPDF


class AnnotationType(Enum):
    TEXT = "text"


# PDF annotation subtypes treated as text annotations
TEXT_ANNOTATION_SUBTYPES = (fitz.PDF_ANNOT_FREE_TEXT, fitz.PDF_ANNOT_TEXT)


@dataclass(frozen=True)
class Annotation:
    """Snapshot of a text annotation stored on a PDF page."""
    page_index: int  # 0-based page index
    xref: int  # identity of the annotation object inside the PDF
    rect: Tuple[float, float, float, float]  # x, y, width, height in page points
    contents: str
    annotation_type: AnnotationType = AnnotationType.TEXT

    @property
    def size(self) -> Tuple[float, float]:
        return self.rect[2], self.rect[3]

    def contains(self, x: float, y: float) -> bool:
        """Check if a point in page coordinates lies within the bounds."""
        rx, ry, rw, rh = self.rect
        return rx <= x <= rx + rw and ry <= y <= ry + rh

    @staticmethod
    def from_pdf_annot(page_index: int, annot: fitz.Annot) -> "Annotation":
        """Create a snapshot from a PyMuPDF annotation."""
        r = annot.rect
        return Annotation(
            page_index=page_index,
            xref=annot.xref,
            rect=(r.x0, r.y0, r.width, r.height),
            contents=annot.info.get("content", ""),
        )
