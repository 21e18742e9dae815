"""
Local file storage and the saved-files picker.
"""
import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, Optional, Union

from PyQt5.QtWidgets import QDialog, QFileDialog, QWidget

from pdfprint.core.errors import StorageError

logger = logging.getLogger(__name__)

PDF_NAME_FILTER = "PDF Files (*.pdf)"

PathLike = Union[str, Path]


class StorageService:
    """Writes documents to disk and lets the user pick saved files."""

    def __init__(self, parent_widget: Optional[QWidget] = None):
        self.parent_widget = parent_widget
        self._picker: Optional[QFileDialog] = None

    def ensure_directory(self, path: PathLike) -> Path:
        """
        Create a directory and any missing parents.

        Succeeds if the directory already exists.

        Raises:
            StorageError: If the directory cannot be created
        """
        directory = Path(path)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(directory, e.strerror or str(e)) from e
        return directory

    def write_file(self, path: PathLike, data: bytes) -> Path:
        """
        Write bytes to a file, replacing any existing file.

        The data goes to a temporary file in the same directory first and
        is moved into place, so a failed write leaves the old file intact.

        Raises:
            StorageError: If the file cannot be written
        """
        target = Path(path)
        temp_path = None
        try:
            temp_fd, temp_path = tempfile.mkstemp(suffix='.pdf', dir=str(target.parent))
            with os.fdopen(temp_fd, 'wb') as f:
                f.write(data)
            os.replace(temp_path, target)
        except OSError as e:
            if temp_path and os.path.exists(temp_path):
                os.remove(temp_path)
            raise StorageError(target, e.strerror or str(e)) from e

        logger.debug("Wrote %d bytes to %s", len(data), target)
        return target

    def pick_file(self, root: PathLike, name_filter: str,
                  on_picked: Callable[[Optional[str]], None]) -> QFileDialog:
        """
        Show a non-blocking file dialog rooted at a directory.

        Args:
            root: Directory the dialog opens in
            name_filter: Qt name filter, e.g. "PDF Files (*.pdf)"
            on_picked: Called with the selected path, or None on cancel

        Returns:
            The open dialog
        """
        directory = Path(root)
        if not directory.is_dir():
            logger.info("Picker directory %s does not exist yet", directory)

        dialog = QFileDialog(self.parent_widget, "Saved PDFs", str(directory), name_filter)
        dialog.setFileMode(QFileDialog.ExistingFile)
        dialog.setAcceptMode(QFileDialog.AcceptOpen)
        dialog.finished.connect(
            lambda result: self._on_picker_finished(dialog, result, on_picked)
        )

        self._picker = dialog
        dialog.open()
        return dialog

    def _on_picker_finished(self, dialog: QFileDialog, result: int,
                            on_picked: Callable[[Optional[str]], None]) -> None:
        files = dialog.selectedFiles() if result == QDialog.Accepted else []
        self._picker = None
        dialog.deleteLater()

        on_picked(files[0] if files else None)
