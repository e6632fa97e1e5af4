"""Tests for logging setup."""

import logging

import pytest

from filer.utils.logging import (
    LOG_FILENAME,
    FilerLogger,
    get_console,
    get_logger,
    print_error,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    setup_logging(level="WARNING", file_enabled=False)


class TestLogging:
    def test_singleton(self):
        assert FilerLogger() is FilerLogger()

    def test_child_logger_names(self):
        assert get_logger().name == "filer"
        assert get_logger("filer.mover.mover").name == "filer.mover.mover"
        assert get_logger("tui").name == "filer.tui"

    def test_file_logging(self, tmp_path):
        log_dir = tmp_path / "logs"
        setup_logging(level="DEBUG", log_dir=log_dir, console_enabled=False)

        get_logger("filer.test").info("moved a.txt")

        for handler in get_logger().handlers:
            handler.flush()
        assert "moved a.txt" in (log_dir / LOG_FILENAME).read_text(encoding="utf-8")

    def test_level_applied(self):
        setup_logging(level="ERROR", console_enabled=True, file_enabled=False)

        assert get_logger().level == logging.ERROR

    def test_no_handlers_when_everything_disabled(self):
        setup_logging(console_enabled=False, file_enabled=False)

        handlers = get_logger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.NullHandler)

    def test_console(self):
        assert get_console() is FilerLogger().console

    def test_print_error(self, capsys):
        print_error("Error: No files to process")

        assert "✗ Error: No files to process" in capsys.readouterr().out
