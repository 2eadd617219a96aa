"""
Tests for logging setup.
"""

import logging

import structlog

from utilities.logger import get_logger, setup_logging


def test_setup_logging_with_file(tmp_path):
    log_file = tmp_path / "logs" / "catalog.log"

    setup_logging(log_level="DEBUG", log_format="json", log_file=log_file)
    get_logger("tests").info("Book created", book_id="5acb40295843ef00e69e28d2")

    for handler in logging.getLogger().handlers:
        handler.flush()

    assert log_file.exists()
    assert "5acb40295843ef00e69e28d2" in log_file.read_text()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)
    for handler in list(root_logger.handlers):
        if isinstance(handler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()
    structlog.reset_defaults()
