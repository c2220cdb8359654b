"""Unit tests for script logging setup."""

import logging

from board.config import Settings
from board.util.logging import setup_logging


class RecordingHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def test_setup_logging_defers_formatting_to_the_logger(monkeypatch):
    # Arrange: keep pytest's own root handlers in place
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: None)
    handler = RecordingHandler()
    logger = logging.getLogger("board.util.logging")
    logger.addHandler(handler)

    # Act
    try:
        setup_logging(Settings(environment="test", debug=True))
    finally:
        logger.removeHandler(handler)

    # Assert
    [record] = handler.records
    assert record.args == ("test", "DEBUG")
    assert record.getMessage() == "Logging configured: environment=test, level=DEBUG"
    assert logging.getLogger("board").level == logging.DEBUG
