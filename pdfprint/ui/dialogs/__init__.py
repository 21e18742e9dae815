"""
Dialogs used by the document viewer.
"""
from .edit_annotation_dialog import AnnotationEditDialog

__all__ = ['AnnotationEditDialog']
