import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from pathlib import Path

import fitz
import pytest
from PyQt5.QtWidgets import QApplication

from pdfprint.config import AppConfig
from pdfprint.controllers import DocumentViewerController
from pdfprint.services import StorageService
from pdfprint.ui.widgets import PDFView

PAGE_SIZE = (300, 400)


def make_pdf_bytes(page_count=2, text="Page"):
    doc = fitz.open()
    for i in range(page_count):
        page = doc.new_page(width=PAGE_SIZE[0], height=PAGE_SIZE[1])
        page.insert_text((36, 72), f"{text} {i + 1}")
    data = doc.tobytes()
    doc.close()
    return data


class FakePrintService:
    """Records submitted jobs; the test decides the outcome."""

    def __init__(self):
        self.jobs = []
        self._callbacks = []

    def submit(self, data, job_name, on_finished):
        self.jobs.append((data, job_name))
        self._callbacks.append(on_finished)

    def finish(self, outcome):
        self._callbacks.pop(0)(outcome)


class FakeStorageService(StorageService):
    """Real file I/O with a scripted picker."""

    def __init__(self):
        super().__init__()
        self.picks = []
        self.next_pick = None

    def pick_file(self, root, name_filter, on_picked):
        self.picks.append((Path(root), name_filter))
        on_picked(self.next_pick)


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def pdf_bytes():
    return make_pdf_bytes()


@pytest.fixture
def pdf_file(tmp_path, pdf_bytes):
    path = tmp_path / "sample.pdf"
    path.write_bytes(pdf_bytes)
    return path


@pytest.fixture
def config(tmp_path):
    return AppConfig(documents_dir=tmp_path / "Documents")


@pytest.fixture
def print_service():
    return FakePrintService()


@pytest.fixture
def storage_service():
    return FakeStorageService()


@pytest.fixture
def view(qapp):
    view = PDFView()
    # Fixed scale keeps viewport and page coordinates predictable:
    # page 0 at (10, 10, 300, 400), page 1 at (10, 420, 300, 400)
    view.set_scale_factor(1.0)
    yield view
    view.deleteLater()


@pytest.fixture
def controller(view, config, print_service, storage_service):
    controller = DocumentViewerController(
        view, print_service, storage_service, config=config
    )
    yield controller
    controller.close_document()
