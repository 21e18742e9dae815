"""
Utility functions and helpers.
"""
from .resource_loader import (
    get_resource_path,
    resource_exists,
    get_documents_dir,
)
from .logging_setup import setup_logging

__all__ = [
    # Resource management
    'get_resource_path',
    'resource_exists',
    'get_documents_dir',

    # Logging
    'setup_logging',
]
