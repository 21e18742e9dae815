"""
Page geometry for the document view.
"""

from .layout import PageLayout, Rect

__all__ = ["PageLayout", "Rect"]
