"""Tests for logging setup."""

import logging

import pytest

from unsafe_ratio.logging_config import LOG_LEVELS, get_logger, setup_logging


class TestSetupLogging:

    @pytest.mark.parametrize(
        "verbosity, level",
        [("quiet", logging.ERROR), ("normal", logging.WARNING), ("verbose", logging.DEBUG)],
    )
    def test_levels(self, verbosity, level):
        logger = setup_logging(verbosity)
        assert logger.name == "unsafe_ratio"
        assert logger.level == level
        assert LOG_LEVELS[verbosity] == level

    def test_unknown_verbosity(self):
        with pytest.raises(ValueError, match="Unknown verbosity"):
            setup_logging("loud")

    def test_log_file(self, tmp_path):
        log_path = tmp_path / "run.log"
        setup_logging("verbose", log_file=str(log_path))
        get_logger("analysis.engine").debug("scanned 3 files")
        for handler in logging.getLogger().handlers:
            handler.flush()
        text = log_path.read_text()
        assert "unsafe_ratio.analysis.engine - DEBUG - scanned 3 files" in text


class TestGetLogger:

    def test_prefix_added(self):
        assert get_logger("scanning.lexer").name == "unsafe_ratio.scanning.lexer"

    def test_package_names_kept(self):
        assert get_logger("unsafe_ratio.config").name == "unsafe_ratio.config"

    def test_root(self):
        assert get_logger().name == "unsafe_ratio"
