import pytest
from PyQt5.QtCore import QEvent, QPoint, QPointF, Qt
from PyQt5.QtGui import QMouseEvent
from PyQt5.QtWidgets import QApplication, QWidget

from pdfprint.ui.widgets import TapGestureRecognizer


def send_mouse(widget, event_type, pos=QPoint(20, 30)):
    buttons = Qt.NoButton if event_type == QEvent.MouseButtonRelease else Qt.LeftButton
    event = QMouseEvent(event_type, QPointF(pos), Qt.LeftButton, buttons, Qt.NoModifier)
    QApplication.sendEvent(widget, event)


def click(widget, pos=QPoint(20, 30)):
    send_mouse(widget, QEvent.MouseButtonPress, pos)
    send_mouse(widget, QEvent.MouseButtonRelease, pos)


def double_click(widget, pos=QPoint(20, 30)):
    click(widget, pos)
    send_mouse(widget, QEvent.MouseButtonDblClick, pos)
    send_mouse(widget, QEvent.MouseButtonRelease, pos)


@pytest.fixture
def widget(qapp):
    widget = QWidget()
    yield widget
    widget.deleteLater()


def recognizer_on(widget, taps):
    recognizer = TapGestureRecognizer(taps_required=taps, parent=widget)
    recognizer.attach(widget)
    taps_seen = []
    recognizer.tapped.connect(taps_seen.append)
    return recognizer, taps_seen


def test_single_tap_fires_on_release(widget):
    _, taps = recognizer_on(widget, 1)
    click(widget, QPoint(5, 6))
    assert taps == [QPoint(5, 6)]


def test_double_click_fires_double_tap_once(widget):
    single_recognizer, single = recognizer_on(widget, 1)
    double_recognizer, double = recognizer_on(widget, 2)

    double_click(widget)

    assert len(double) == 1
    # Only the first release counts as a single tap
    assert len(single) == 1
    assert single_recognizer.widget is widget
    assert double_recognizer.widget is widget


def test_detached_recognizer_ignores_events(widget):
    recognizer, taps = recognizer_on(widget, 1)
    recognizer.detach()
    click(widget)
    assert taps == []
    assert recognizer.widget is None


def test_disabled_recognizer_ignores_events(widget):
    recognizer, taps = recognizer_on(widget, 1)
    recognizer.enabled = False
    click(widget)
    assert taps == []


def test_right_button_is_ignored(widget):
    _, taps = recognizer_on(widget, 1)
    event = QMouseEvent(QEvent.MouseButtonRelease, QPointF(1, 1), Qt.RightButton,
                        Qt.NoButton, Qt.NoModifier)
    QApplication.sendEvent(widget, event)
    assert taps == []


def test_invalid_tap_count():
    with pytest.raises(ValueError):
        TapGestureRecognizer(taps_required=3)
