import fitz
import pytest
from PyQt5.QtCore import QEvent, QPoint, QPointF, Qt
from PyQt5.QtGui import QMouseEvent
from PyQt5.QtWidgets import QApplication

from pdfprint.services import PDF_NAME_FILTER, PrintOutcome, PrintStatus
from pdfprint.ui.widgets import TapGestureRecognizer
from tests.conftest import make_pdf_bytes

# Viewport point over page 0 at page coordinates (50, 100)
TAP = QPoint(60, 110)


def annotations_on(controller, page_index=0):
    return controller.current_document.annotations.get_annotations_for_page(page_index)


def record(signal):
    seen = []
    signal.connect(lambda *args: seen.append(args[0] if len(args) == 1 else args))
    return seen


@pytest.fixture
def loaded(controller, pdf_file):
    assert controller.load_document(pdf_file)
    return controller


# Loading

def test_initial_state(controller):
    assert controller.current_document is None
    assert controller.annotation_mode_enabled is False
    assert controller.toggle_label == "Add"


def test_load_document_shows_it(controller, view, pdf_file):
    changed = record(controller.document_changed)

    assert controller.load_document(pdf_file)

    assert controller.current_document.page_count == 2
    assert view.document() is controller.current_document
    assert changed == [controller.current_document]


def test_load_document_from_bytes(controller, pdf_bytes):
    assert controller.load_document(pdf_bytes)
    assert controller.current_document.source is None


def test_failed_load_keeps_current_document(loaded, tmp_path):
    previous = loaded.current_document
    errors = record(loaded.error_occurred)
    corrupt = tmp_path / "corrupt.pdf"
    corrupt.write_bytes(b"not a pdf at all")

    assert not loaded.load_document(corrupt)
    assert not loaded.load_document(tmp_path / "missing.pdf")

    assert loaded.current_document is previous
    assert len(errors) == 2


def test_failed_load_with_nothing_shown(controller, tmp_path):
    assert not controller.load_document(tmp_path / "missing.pdf")
    assert controller.current_document is None


# Printing

def test_print_without_document_is_a_no_op(controller, print_service):
    assert not controller.print_document()
    assert print_service.jobs == []


def test_print_submits_document_bytes(loaded, print_service):
    assert loaded.print_document()

    data, job_name = print_service.jobs[0]
    assert job_name == "My PDF Print Job"
    reopened = fitz.open(stream=data, filetype="pdf")
    assert reopened.page_count == 2
    assert "Page 1" in reopened.load_page(0).get_text()


def test_print_includes_annotations(loaded, print_service):
    loaded.toggle_annotation_mode()
    loaded.handle_single_tap(TAP)

    loaded.print_document()

    data, _ = print_service.jobs[0]
    reopened = fitz.open(stream=data, filetype="pdf")
    assert len(list(reopened.load_page(0).annots())) == 1


@pytest.mark.parametrize("outcome", [
    PrintOutcome.completed(),
    PrintOutcome.failed("Printer on fire"),
    PrintOutcome.canceled(),
])
def test_print_outcome_is_reported(loaded, print_service, outcome):
    finished = record(loaded.print_finished)
    loaded.on_print_requested()

    print_service.finish(outcome)

    assert finished == [outcome]


def test_print_outcome_messages():
    assert PrintOutcome.completed().message == "Printing completed successfully."
    assert PrintOutcome.failed("jam").message == "Printing error: jam"
    assert PrintOutcome.canceled().message == "Printing was canceled."
    assert PrintOutcome.failed("jam").status == PrintStatus.FAILED


# Saving

def test_save_without_document_writes_nothing(controller, config):
    errors = record(controller.error_occurred)

    assert controller.save_document() is None

    assert not config.documents_dir.exists()
    assert errors == []


def test_save_writes_fixed_path(loaded, config):
    saved = record(loaded.document_saved)

    path = loaded.save_document()

    assert path == config.documents_dir / "PDFs" / "myPDF.pdf"
    assert path.read_bytes() == loaded.current_document.to_bytes()
    assert saved == [str(path)]


def test_save_twice_gives_identical_file(loaded, config):
    first = loaded.save_document().read_bytes()
    second = loaded.save_document().read_bytes()

    assert first == second
    assert [p.name for p in (config.documents_dir / "PDFs").iterdir()] == ["myPDF.pdf"]


def test_save_overwrites_previous_file(loaded, config):
    target = config.documents_dir / "PDFs" / "myPDF.pdf"
    target.parent.mkdir(parents=True)
    target.write_bytes(b"old contents")

    loaded.on_save_requested()

    assert target.read_bytes() == loaded.current_document.to_bytes()


def test_save_failure_is_reported(loaded, config):
    config.documents_dir.write_bytes(b"a file where the directory should be")
    errors = record(loaded.error_occurred)

    assert loaded.save_document() is None

    assert len(errors) == 1
    assert errors[0][0] == "Error Saving PDF"


# Browsing

def test_browse_opens_picker_on_saved_directory(controller, storage_service, config):
    controller.browse_saved_files()
    assert storage_service.picks == [(config.documents_dir / "PDFs", PDF_NAME_FILTER)]
    assert (config.documents_dir / "PDFs").is_dir()


def test_picked_file_replaces_document_and_drops_annotations(loaded, storage_service, tmp_path):
    loaded.toggle_annotation_mode()
    loaded.handle_single_tap(TAP)
    other = tmp_path / "other.pdf"
    other.write_bytes(make_pdf_bytes(page_count=3, text="Other"))
    storage_service.next_pick = str(other)

    loaded.on_browse_requested()

    assert loaded.current_document.source == str(other)
    assert loaded.current_document.page_count == 3
    assert loaded.current_document.annotations.get_annotation_count() == 0


def test_cancelled_picker_keeps_document(loaded, storage_service):
    previous = loaded.current_document
    storage_service.next_pick = None

    loaded.browse_saved_files()

    assert loaded.current_document is previous


def test_saved_file_can_be_browsed_back(loaded, storage_service):
    loaded.toggle_annotation_mode()
    loaded.handle_single_tap(TAP)
    path = loaded.save_document()
    storage_service.next_pick = str(path)

    loaded.browse_saved_files()

    assert [a.contents for a in annotations_on(loaded)] == ["This is a text annotation"]


# Annotation mode

def test_toggle_is_its_own_inverse(controller, view):
    modes = record(controller.annotation_mode_changed)
    recognizers = view.gesture_recognizers()

    assert controller.toggle_annotation_mode() is True
    assert controller.toggle_label == "Stop"
    assert len(view.gesture_recognizers()) == len(recognizers) + 1

    assert controller.toggle_annotation_mode() is False
    assert controller.toggle_label == "Add"
    assert view.gesture_recognizers() == recognizers
    assert modes == [True, False]


def test_repeated_toggling_does_not_accumulate_recognizers(controller, view):
    for _ in range(5):
        controller.toggle_annotation_mode()
        controller.toggle_annotation_mode()
    controller.toggle_annotation_mode()

    assert len(view.gesture_recognizers()) == 2


def test_disabling_keeps_other_recognizers(controller, view):
    other = TapGestureRecognizer(taps_required=1)
    view.add_gesture_recognizer(other)

    controller.toggle_annotation_mode()
    controller.toggle_annotation_mode()

    assert other in view.gesture_recognizers()
    assert len(view.gesture_recognizers()) == 2


# Single tap

def test_single_tap_ignored_when_mode_off(loaded):
    assert loaded.handle_single_tap(TAP) is None
    assert annotations_on(loaded) == []


def test_single_tap_adds_placeholder_annotation(loaded):
    added = record(loaded.annotation_added)
    loaded.toggle_annotation_mode()

    annotation = loaded.handle_single_tap(TAP)

    assert annotation.page_index == 0
    assert annotation.contents == "This is a text annotation"
    assert annotation.rect == pytest.approx((50, 100, 200, 40), abs=1)
    assert annotations_on(loaded) == [annotation]
    assert added == [annotation]


def test_single_tap_uses_nearest_page(loaded):
    loaded.toggle_annotation_mode()

    annotation = loaded.handle_single_tap(QPoint(60, 418))

    assert annotation.page_index == 1
    assert len(annotations_on(loaded, 1)) == 1


def test_single_taps_stack_annotations(loaded):
    loaded.toggle_annotation_mode()
    loaded.handle_single_tap(TAP)
    loaded.handle_single_tap(TAP)
    assert len(annotations_on(loaded)) == 2


def test_single_tap_without_document(controller):
    controller.toggle_annotation_mode()
    assert controller.handle_single_tap(TAP) is None


def test_tap_scenario_through_viewport_events(loaded, view):
    def click():
        for event_type, buttons in ((QEvent.MouseButtonPress, Qt.LeftButton),
                                    (QEvent.MouseButtonRelease, Qt.NoButton)):
            event = QMouseEvent(event_type, QPointF(TAP), Qt.LeftButton, buttons, Qt.NoModifier)
            QApplication.sendEvent(view.viewport(), event)

    loaded.toggle_annotation_mode()
    click()
    annotations = annotations_on(loaded)
    assert len(annotations) == 1
    assert annotations[0].contents == "This is a text annotation"
    assert annotations[0].rect == pytest.approx((50, 100, 200, 40), abs=1)

    loaded.toggle_annotation_mode()
    click()
    assert len(annotations_on(loaded)) == 1


# Double tap

def add_note(controller, x, y, text="Note"):
    return controller.current_document.annotations.add_text_annotation(0, x, y, 200, 40, text)


def test_double_tap_on_empty_area_opens_nothing(loaded):
    add_note(loaded, 50, 100)
    opened = record(loaded.edit_dialog_opened)

    assert loaded.handle_double_tap(QPoint(300, 300)) == []

    assert opened == []
    assert loaded.active_edit_dialog is None


def test_double_tap_edits_annotation(loaded):
    note = add_note(loaded, 50, 100)
    opened = record(loaded.edit_dialog_opened)
    edited = record(loaded.annotation_edited)

    assert loaded.handle_double_tap(QPoint(70, 120)) == [note]

    assert len(opened) == 1
    dialog = opened[0]
    assert dialog.text() == "Note"
    dialog.set_text("Edited")
    dialog.accept()

    assert annotations_on(loaded)[0].contents == "Edited"
    assert edited[0].contents == "Edited"
    assert loaded.active_edit_dialog is None


def test_cancelled_edit_leaves_annotation(loaded):
    add_note(loaded, 50, 100)
    opened = record(loaded.edit_dialog_opened)

    loaded.handle_double_tap(QPoint(70, 120))
    opened[0].set_text("Discarded")
    opened[0].reject()

    assert annotations_on(loaded)[0].contents == "Note"


def test_double_tap_works_with_annotation_mode_off(loaded):
    add_note(loaded, 50, 100)
    assert not loaded.annotation_mode_enabled
    assert len(loaded.handle_double_tap(QPoint(70, 120))) == 1


def test_overlapping_annotations_open_dialogs_in_turn(loaded):
    add_note(loaded, 50, 100, "First")
    add_note(loaded, 60, 110, "Second")
    opened = record(loaded.edit_dialog_opened)

    assert len(loaded.handle_double_tap(QPoint(80, 130))) == 2

    assert len(opened) == 1
    opened[0].set_text("First edited")
    opened[0].accept()

    assert len(opened) == 2
    assert opened[1].text() == "Second"
    opened[1].reject()

    assert [a.contents for a in annotations_on(loaded)] == ["First edited", "Second"]
    assert loaded.active_edit_dialog is None


def test_loading_new_document_cancels_pending_edits(loaded, pdf_bytes):
    add_note(loaded, 50, 100)
    add_note(loaded, 50, 100)
    opened = record(loaded.edit_dialog_opened)
    loaded.handle_double_tap(QPoint(70, 120))

    loaded.load_document(pdf_bytes)

    assert len(opened) == 1
    assert loaded.active_edit_dialog is None


def test_double_tap_through_viewport_events(loaded, view):
    add_note(loaded, 50, 100)
    opened = record(loaded.edit_dialog_opened)
    point = QPointF(70, 120)

    for event_type, buttons in ((QEvent.MouseButtonPress, Qt.LeftButton),
                                (QEvent.MouseButtonRelease, Qt.NoButton),
                                (QEvent.MouseButtonDblClick, Qt.LeftButton),
                                (QEvent.MouseButtonRelease, Qt.NoButton)):
        event = QMouseEvent(event_type, point, Qt.LeftButton, buttons, Qt.NoModifier)
        QApplication.sendEvent(view.viewport(), event)

    assert len(opened) == 1
    opened[0].reject()
