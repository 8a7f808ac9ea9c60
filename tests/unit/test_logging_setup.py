from __future__ import annotations

import logging
from collections.abc import Iterator
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from patient_intake.bootstrap.logging_setup import setup_logging


@pytest.fixture
def root_handlers() -> Iterator[None]:
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in before:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def _file_handlers(path: Path) -> list[RotatingFileHandler]:
    return [
        handler
        for handler in logging.getLogger().handlers
        if isinstance(handler, RotatingFileHandler) and Path(handler.baseFilename) == path.resolve()
    ]


def test_setup_logging_creates_log_file(tmp_path: Path, root_handlers: None) -> None:
    log_dir = tmp_path / "logs"
    log_path = setup_logging(log_dir, logging.DEBUG)

    logging.getLogger("patient_intake.test").info("hello log")
    for handler in _file_handlers(log_path):
        handler.flush()

    assert log_path == log_dir / "app.log"
    assert "INFO patient_intake.test: hello log" in log_path.read_text(encoding="utf-8")
    assert logging.getLogger().level == logging.DEBUG


def test_setup_logging_is_idempotent(tmp_path: Path, root_handlers: None) -> None:
    log_path = setup_logging(tmp_path)
    setup_logging(tmp_path)
    handlers = _file_handlers(log_path)
    assert len(handlers) == 1
    assert handlers[0].maxBytes == 2_000_000
    assert handlers[0].backupCount == 3
