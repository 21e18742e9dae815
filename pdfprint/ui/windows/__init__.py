"""
Top-level application windows.
"""
from .main_window import MainWindow

__all__ = ['MainWindow']
