"""
Resource loading utilities for handling bundled and development resources.
"""
import os
import sys
from pathlib import Path

from PyQt5.QtCore import QStandardPaths

PACKAGE_DIR = Path(__file__).resolve().parent.parent


def get_resource_path(relative_path: str) -> str:
    """
    Get the absolute path to a resource file.

    This function handles both development (running from source) and
    production (bundled with PyInstaller) environments.

    Args:
        relative_path: Relative path to the resource from the package root

    Returns:
        Absolute path to the resource
    """
    # Check if running as PyInstaller bundle
    if hasattr(sys, '_MEIPASS'):
        base_path = Path(sys._MEIPASS) / "pdfprint"
    else:
        base_path = PACKAGE_DIR

    return str(base_path / relative_path)


def resource_exists(relative_path: str) -> bool:
    """
    Check if a resource file exists.

    Args:
        relative_path: Relative path to check

    Returns:
        True if resource exists
    """
    return os.path.exists(get_resource_path(relative_path))


def get_documents_dir() -> Path:
    """
    Get the per-user documents directory.

    Does not create the directory.

    Returns:
        Path to the documents directory
    """
    location = QStandardPaths.writableLocation(QStandardPaths.DocumentsLocation)
    if location:
        return Path(location)
    return Path.home() / "Documents"
