"""
Logging configuration for PDFPrint.

Call setup_logging() once at application startup; modules log through
logging.getLogger(__name__).
"""

import logging
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_logging_initialized = False


def setup_logging(
    log_level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = None,
) -> None:
    """
    Configure the root logger with a console handler.

    Args:
        log_level: Level as a number or a name such as "DEBUG"
        log_file: Optional file that receives the same records
    """
    global _logging_initialized

    if _logging_initialized:
        return

    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning("Could not create log file: %s. Logging to console only.", e)

    _logging_initialized = True
