import logging
import sys
from pathlib import Path
from typing import Optional

def setup_logging(debug: bool = False, log_path: Optional[Path] = None) -> logging.Logger:
    """
    Setup logging configuration for the dashwatch daemon.

    Always logs to stderr; additionally appends to log_path when given.
    Returns configured logger instance.

    Args:
        debug: If True, enable DEBUG level logging (encoder command lines, dropped paths)
        log_path: Optional path to a log file, parent directories are created
    """
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_path:
        log_file = Path(log_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True  # Override any existing configuration
    )

    logger = logging.getLogger(__name__)
    target = log_path if log_path else "stderr"
    logger.info(f"Logging initialized: {target} (debug={'ON' if debug else 'OFF'})")

    return logger
