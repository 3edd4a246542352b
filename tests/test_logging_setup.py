"""Tests for loguru sink configuration."""

import pytest
from loguru import logger

from formatgenius import logging_setup
from formatgenius.logging_setup import (
    get_log_directory,
    get_recent_logs,
    log_document_operation,
    reset_logging,
    setup_logging,
)


@pytest.fixture
def log_dir(tmp_path):
    reset_logging()
    directory = setup_logging(log_level="INFO", log_dir=tmp_path / "logs")
    yield directory
    reset_logging()


class TestSetupLogging:

    def test_creates_log_directory(self, log_dir):
        assert log_dir.is_dir()
        assert get_log_directory() == log_dir

    def test_second_call_is_ignored(self, log_dir, tmp_path):
        assert setup_logging(log_dir=tmp_path / "other") == log_dir
        assert not (tmp_path / "other").exists()

    def test_console_only(self, tmp_path):
        reset_logging()
        try:
            assert setup_logging(enable_file_logging=False) is None
            assert get_log_directory() == logging_setup.LOG_DIR
        finally:
            reset_logging()


class TestLogFiles:

    def test_main_log_tail(self, log_dir):
        logger.info("first line")
        logger.info("second line")
        logger.complete()

        tail = get_recent_logs(max_lines=1)
        assert "second line" in tail
        assert "first line" not in tail

    def test_errors_log_only_has_errors(self, log_dir):
        logger.info("routine message")
        logger.error("something broke")
        logger.complete()

        errors = get_recent_logs(log_type="errors")
        assert "something broke" in errors
        assert "routine message" not in errors

    def test_request_log_only_has_document_operations(self, log_dir):
        logger.info("unrelated")
        log_document_operation("upload", "paper.docx", {"style": "harvard"})
        logger.complete()

        requests = get_recent_logs(log_type="requests")
        assert "Document upload: paper.docx" in requests
        assert "unrelated" not in requests

    def test_missing_log_file(self, tmp_path, monkeypatch):
        reset_logging()
        monkeypatch.setattr(logging_setup, "LOG_DIR", tmp_path / "nowhere")
        assert get_recent_logs() == "No log file found."

    def test_zero_lines(self, log_dir):
        logger.info("anything")
        logger.complete()
        assert get_recent_logs(max_lines=0) == ""
