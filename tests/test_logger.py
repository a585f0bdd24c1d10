"""Tests for console and file logging setup."""
import logging

import pytest

from appstrap.core.logger import ROOT_LOGGER_NAME, get_logger, setup_file_logging


@pytest.fixture
def package_logger():
    """Yield the appstrap logger and drop file handlers added by the test."""
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    before = list(root_logger.handlers)
    root_logger.setLevel(logging.INFO)
    yield root_logger
    for handler in root_logger.handlers:
        if handler not in before:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(logging.INFO)


def _flush(logger):
    for handler in logger.handlers:
        handler.flush()


class TestFileLogging:
    """Test setup_file_logging levels and idempotence."""

    def test_module_loggers_inherit_package_level(self, package_logger):
        logger = get_logger("appstrap.core.runner")
        assert logger.level == logging.NOTSET
        assert logger.getEffectiveLevel() == logging.INFO

    def test_verbose_writes_debug_lines(self, tmp_path, package_logger):
        log_file = tmp_path / "verbose.log"
        setup_file_logging(str(log_file), verbose=True)

        get_logger("appstrap.core.runner").debug("Running: apt install -y git")
        _flush(package_logger)

        assert "Running: apt install -y git" in log_file.read_text()

    def test_default_level_drops_debug_lines(self, tmp_path, package_logger):
        log_file = tmp_path / "quiet.log"
        setup_file_logging(str(log_file))

        logger = get_logger("appstrap.core.runner")
        logger.debug("Running: apt install -y git")
        logger.info("✓ Successfully ran: apt install -y git")
        _flush(package_logger)

        content = log_file.read_text()
        assert "Running:" not in content
        assert "Successfully ran" in content

    def test_same_target_reuses_handler(self, tmp_path, package_logger):
        log_file = tmp_path / "once.log"
        setup_file_logging(str(log_file))
        count = len(package_logger.handlers)

        setup_file_logging(str(log_file), verbose=True)

        assert len(package_logger.handlers) == count
        assert package_logger.level == logging.DEBUG
