"""
Application settings.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple

from pdfprint.utils.resource_loader import get_documents_dir

ENV_DOCUMENTS_DIR = "PDFPRINT_DOCUMENTS_DIR"
ENV_LOG_LEVEL = "PDFPRINT_LOG_LEVEL"
ENV_LOG_FILE = "PDFPRINT_LOG_FILE"


@dataclass
class AppConfig:
    """Settings for the viewer, with defaults for normal use."""

    # Saved documents live at <documents_dir>/<saved_subdirectory>/<saved_filename>
    documents_dir: Path = field(default_factory=get_documents_dir)
    saved_subdirectory: str = "PDFs"
    saved_filename: str = "myPDF.pdf"

    print_job_name: str = "My PDF Print Job"

    # Relative to the package directory
    bundled_document: str = "resources/dummy.pdf"

    annotation_size: Tuple[float, float] = (200.0, 40.0)
    annotation_placeholder: str = "This is a text annotation"
    annotation_inactive_label: str = "Add"
    annotation_active_label: str = "Stop"

    log_level: str = "INFO"
    log_file: Optional[Path] = None

    @property
    def saved_directory(self) -> Path:
        return Path(self.documents_dir) / self.saved_subdirectory

    @property
    def saved_file_path(self) -> Path:
        return self.saved_directory / self.saved_filename

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """
        Build a config with overrides from environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            Configured AppConfig
        """
        if environ is None:
            environ = os.environ

        config = cls()
        documents_dir = environ.get(ENV_DOCUMENTS_DIR)
        if documents_dir:
            config.documents_dir = Path(documents_dir).expanduser()

        log_level = environ.get(ENV_LOG_LEVEL)
        if log_level:
            config.log_level = log_level.upper()

        log_file = environ.get(ENV_LOG_FILE)
        if log_file:
            config.log_file = Path(log_file).expanduser()

        return config
