"""
Application controllers for managing interactions between UI and core logic.
"""
from .document_controller import DocumentViewerController
from .input_handler import UserInputHandler

__all__ = [
    'DocumentViewerController',
    'UserInputHandler',
]
