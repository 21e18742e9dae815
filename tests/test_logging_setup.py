import logging

import pytest

from pdfprint.utils import logging_setup


@pytest.fixture
def fresh_root_logger(monkeypatch):
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    monkeypatch.setattr(logging_setup, "_logging_initialized", False)
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_log_file_receives_records(fresh_root_logger, tmp_path):
    log_file = tmp_path / "logs" / "pdfprint.log"

    logging_setup.setup_logging("debug", log_file)
    logging.getLogger("pdfprint.test").info("PDF saved to: %s", "/tmp/x.pdf")
    for handler in fresh_root_logger.handlers:
        handler.flush()

    assert fresh_root_logger.level == logging.DEBUG
    assert "PDF saved to: /tmp/x.pdf" in log_file.read_text(encoding="utf-8")


def test_setup_runs_once(fresh_root_logger):
    before = len(fresh_root_logger.handlers)

    logging_setup.setup_logging(logging.INFO)
    logging_setup.setup_logging(logging.INFO)

    assert len(fresh_root_logger.handlers) == before + 1
