"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from strata.logging_config import get_logger, setup_logging, verbosity_from_flags


class TestVerbosityFromFlags:
    def test_default(self):
        assert verbosity_from_flags() == "normal"

    def test_verbose(self):
        assert verbosity_from_flags(verbose=True) == "verbose"

    def test_quiet_wins(self):
        assert verbosity_from_flags(verbose=True, quiet=True) == "quiet"


class TestSetupLogging:
    @pytest.mark.parametrize(
        "verbosity,level",
        [("quiet", logging.ERROR), ("normal", logging.WARNING), ("verbose", logging.DEBUG)],
    )
    def test_levels(self, verbosity, level):
        logger = setup_logging(verbosity)
        assert logger.name == "strata"
        assert logger.level == level

    def test_repeated_calls_replace_handlers(self):
        setup_logging("normal")
        logger = setup_logging("verbose")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "strata.log"
        logger = setup_logging("normal", log_file=str(log_file))
        get_logger("architecture.analyzer").warning("prefix overlap")
        for handler in logger.handlers:
            handler.flush()
        assert "prefix overlap" in log_file.read_text()
        setup_logging("normal")

    def test_unknown_verbosity(self):
        with pytest.raises(ValueError):
            setup_logging("loud")


class TestGetLogger:
    def test_namespaced(self):
        assert get_logger("architecture.rules").name == "strata.architecture.rules"

    def test_already_namespaced(self):
        assert get_logger("strata.api").name == "strata.api"
        assert get_logger("strata").name == "strata"

    def test_root(self):
        assert get_logger().name == "strata"
