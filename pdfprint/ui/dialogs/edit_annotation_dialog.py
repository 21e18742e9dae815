"""
Dialog for editing the text of an annotation.
"""
from typing import Optional

from PyQt5.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QLabel,
    QLineEdit,
    QVBoxLayout,
    QWidget,
)


class AnnotationEditDialog(QDialog):
    """Modal dialog with a single text field and Save/Cancel buttons."""

    def __init__(self, contents: str, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setWindowTitle("Edit Annotation")
        self.setModal(True)
        self.setMinimumWidth(320)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 12)
        layout.setSpacing(10)

        self.message_label = QLabel("Modify annotation content", self)
        layout.addWidget(self.message_label)

        self.text_edit = QLineEdit(contents, self)
        self.text_edit.selectAll()
        layout.addWidget(self.text_edit)

        self.button_box = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel, self)
        self.button_box.accepted.connect(self.accept)
        self.button_box.rejected.connect(self.reject)
        layout.addWidget(self.button_box)

    def text(self) -> str:
        return self.text_edit.text()

    def set_text(self, text: str) -> None:
        self.text_edit.setText(text)
