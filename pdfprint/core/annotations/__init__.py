"""
Annotation system for PDF documents.
"""
from .models import Annotation, AnnotationType
from .manager import AnnotationManager

__all__ = [
    'Annotation',
    'AnnotationType',
    'AnnotationManager',
]
