"""
Geometry of pages stacked vertically in a scrollable view.
"""
import math
from typing import List, Optional, Tuple

Rect = Tuple[float, float, float, float]  # x, y, width, height


class PageLayout:
    """
    Maps between view content coordinates and page coordinates.

    Pages are stacked top to bottom, separated by `spacing` and centred
    horizontally inside a `margin`. Page coordinates are PDF points with a
    top-left origin; content coordinates are pixels.
    """

    MIN_SCALE = 0.1

    def __init__(self, page_sizes: Optional[List[Tuple[float, float]]] = None,
                 scale: float = 1.0, margin: float = 10.0,
                 spacing: float = 10.0):
        self.page_sizes: List[Tuple[float, float]] = list(page_sizes or [])
        self.scale = max(scale, self.MIN_SCALE)
        self.margin = margin
        self.spacing = spacing
        self._rects: List[Rect] = []
        self._relayout()

    def _relayout(self) -> None:
        """Recompute page rectangles for the current scale."""
        self._rects = []
        widest = self.max_page_width * self.scale
        y = self.margin

        for width, height in self.page_sizes:
            w = width * self.scale
            h = height * self.scale
            x = self.margin + (widest - w) / 2
            self._rects.append((x, y, w, h))
            y += h + self.spacing

    @property
    def page_count(self) -> int:
        return len(self.page_sizes)

    @property
    def max_page_width(self) -> float:
        return max((w for w, _ in self.page_sizes), default=0.0)

    def set_page_sizes(self, page_sizes: List[Tuple[float, float]]) -> None:
        self.page_sizes = list(page_sizes)
        self._relayout()

    def set_scale(self, scale: float) -> None:
        self.scale = max(scale, self.MIN_SCALE)
        self._relayout()

    def fit_scale(self, viewport_width: float) -> float:
        """
        Scale that fits the widest page into a viewport width.

        Returns the current scale if the viewport is too small to fit
        anything or there are no pages.
        """
        available = viewport_width - 2 * self.margin
        if available <= 0 or self.max_page_width <= 0:
            return self.scale
        return max(available / self.max_page_width, self.MIN_SCALE)

    def content_size(self) -> Tuple[float, float]:
        """Total (width, height) of the laid out pages including margins."""
        if not self._rects:
            return 0.0, 0.0
        last_x, last_y, last_w, last_h = self._rects[-1]
        width = self.max_page_width * self.scale + 2 * self.margin
        height = last_y + last_h + self.margin
        return width, height

    def page_rect(self, page_index: int) -> Rect:
        """
        Get the rectangle of a page in content coordinates.

        Raises:
            IndexError: If the page index is out of range
        """
        return self._rects[page_index]

    def page_at(self, x: float, y: float, nearest: bool = True) -> Optional[int]:
        """
        Find the page under a content-space point.

        Args:
            x: X coordinate in content pixels
            y: Y coordinate in content pixels
            nearest: Fall back to the closest page when no page contains
                the point

        Returns:
            0-based page index, or None if there are no pages (or no page
            contains the point and nearest is False)
        """
        best_index = None
        best_distance = math.inf

        for index, (rx, ry, rw, rh) in enumerate(self._rects):
            dx = max(rx - x, 0.0, x - (rx + rw))
            dy = max(ry - y, 0.0, y - (ry + rh))
            if dx == 0.0 and dy == 0.0:
                return index

            distance = math.hypot(dx, dy)
            if distance < best_distance:
                best_index = index
                best_distance = distance

        return best_index if nearest else None

    def view_to_page(self, x: float, y: float, page_index: int) -> Tuple[float, float]:
        """Convert a content-space point into page coordinates."""
        rx, ry, _, _ = self.page_rect(page_index)
        return (x - rx) / self.scale, (y - ry) / self.scale

    def page_to_view(self, x: float, y: float, page_index: int) -> Tuple[float, float]:
        """Convert a page-space point into content coordinates."""
        rx, ry, _, _ = self.page_rect(page_index)
        return rx + x * self.scale, ry + y * self.scale

    def page_rect_to_view(self, rect: Rect, page_index: int) -> Rect:
        """Convert a page-space rectangle into content coordinates."""
        x, y = self.page_to_view(rect[0], rect[1], page_index)
        return x, y, rect[2] * self.scale, rect[3] * self.scale
