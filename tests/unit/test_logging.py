"""Unit tests for logging infrastructure."""
import logging
from dashwatch.infrastructure.logging import setup_logging


def _flush_root():
    for handler in logging.getLogger().handlers:
        handler.flush()


def test_setup_logging_returns_logger():
    """setup_logging works without a log file."""
    logger = setup_logging(debug=False)

    assert logger is not None
    assert isinstance(logger, logging.Logger)


def test_setup_logging_creates_log_file(tmp_path):
    """Test that setup_logging creates the log file and its parent."""
    log_file = tmp_path / "logs" / "dashwatch.log"

    setup_logging(debug=False, log_path=log_file)

    assert log_file.exists()


def test_setup_logging_debug_mode():
    """Test setup_logging in debug mode."""
    logger = setup_logging(debug=True)

    assert logger.getEffectiveLevel() == logging.DEBUG


def test_setup_logging_normal_mode():
    """Test setup_logging in normal mode."""
    logger = setup_logging(debug=False)

    assert logger.getEffectiveLevel() == logging.INFO


def test_setup_logging_always_logs_to_stderr(tmp_path):
    setup_logging(debug=False, log_path=tmp_path / "x.log")

    handler_types = [type(h) for h in logging.getLogger().handlers]
    assert logging.StreamHandler in handler_types
    assert logging.FileHandler in handler_types


def test_setup_logging_format_includes_level(tmp_path):
    """Test that log format includes timestamp separator and level name."""
    log_file = tmp_path / "dashwatch.log"
    logger = setup_logging(debug=False, log_path=log_file)

    logger.info("Info message")
    logger.warning("Warning message")
    logger.error("Error message")
    _flush_root()

    log_content = log_file.read_text()

    assert " - " in log_content
    assert "INFO" in log_content
    assert "WARNING" in log_content
    assert "ERROR" in log_content


def test_setup_logging_debug_messages(tmp_path):
    """Test that debug messages only appear in debug mode."""
    log_file = tmp_path / "dashwatch.log"

    logger_normal = setup_logging(debug=False, log_path=log_file)
    logger_normal.debug("Debug message in normal mode")
    _flush_root()

    assert "Debug message in normal mode" not in log_file.read_text()

    logger_debug = setup_logging(debug=True, log_path=log_file)
    logger_debug.debug("Debug message in debug mode")
    _flush_root()

    assert "Debug message in debug mode" in log_file.read_text()


def test_module_loggers_reach_log_file(tmp_path):
    log_file = tmp_path / "dashwatch.log"
    setup_logging(debug=False, log_path=log_file)

    logging.getLogger("dashwatch.pipeline.dispatcher").info("from a module logger")
    _flush_root()

    assert "from a module logger" in log_file.read_text()
