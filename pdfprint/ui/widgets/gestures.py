"""
Tap recognizers for mouse input on a widget.
"""

from typing import Optional

from PyQt5.QtCore import QEvent, QObject, QPoint, Qt, pyqtSignal
from PyQt5.QtWidgets import QWidget


class TapGestureRecognizer(QObject):
    """
    Recognizes single or double left-button taps on a widget.

    A single-tap recognizer fires on button release; the release that
    completes a double click is not reported as another single tap.
    A double-tap recognizer fires on the double click itself.
    """

    # Signals
    tapped = pyqtSignal(QPoint)  # position in the widget's coordinates

    def __init__(self, taps_required: int = 1, parent: Optional[QObject] = None):
        super().__init__(parent)
        if taps_required not in (1, 2):
            raise ValueError("taps_required must be 1 or 2")

        self.taps_required = taps_required
        self.enabled = True
        self._widget: Optional[QWidget] = None
        self._in_double_click = False

    @property
    def widget(self) -> Optional[QWidget]:
        return self._widget

    def attach(self, widget: QWidget) -> None:
        """Start listening to mouse events on a widget."""
        if self._widget is widget:
            return
        self.detach()
        self._widget = widget
        widget.installEventFilter(self)

    def detach(self) -> None:
        """Stop listening to the current widget."""
        if self._widget is not None:
            self._widget.removeEventFilter(self)
            self._widget = None
        self._in_double_click = False

    def eventFilter(self, obj, event):  # type: ignore[override]
        if obj is not self._widget or not self.enabled:
            return False

        etype = event.type()
        if etype == QEvent.MouseButtonDblClick and event.button() == Qt.LeftButton:
            self._in_double_click = True
            if self.taps_required == 2:
                self.tapped.emit(event.pos())
        elif etype == QEvent.MouseButtonRelease and event.button() == Qt.LeftButton:
            if self._in_double_click:
                self._in_double_click = False
            elif self.taps_required == 1:
                self.tapped.emit(event.pos())

        # Never consume events; other handlers still see them
        return False
