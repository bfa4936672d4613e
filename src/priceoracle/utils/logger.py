"""
Loguru setup for the oracle process.

Two sinks:
  - **stderr**: the operator-chosen level (``--log-level`` / ``LOG_LEVEL``).
  - **File**: always DEBUG, with source location.

Call ``setup_logger()`` once from the entry point, after argument parsing
and before the handler is built, so configuration errors reach both sinks.
"""
import sys
from pathlib import Path

from loguru import logger

# Levels understood by both loguru and uvicorn.
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logger(log_dir: str = "logs", level: str = "INFO") -> logger:
    """Configure and return the global Loguru logger.

    Args:
        log_dir: Directory for rotated log files; created if missing.
        level: Minimum level for the terminal sink (case-insensitive).

    Returns:
        The shared ``logger`` singleton.

    Raises:
        ValueError: If *level* is not one of ``LOG_LEVELS``.
    """
    level = level.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {level!r}; expected one of {LOG_LEVELS}")

    logger.remove()

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    logger.add(
        log_path / "price_oracle_{time:YYYY-MM-DD}.log",
        level="DEBUG",
        rotation="10 MB",
        retention="30 days",
        compression="zip",
        format=(
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
            "{name}:{function}:{line} - {message}"
        ),
        enqueue=True,
        encoding="utf-8",
    )

    logger.debug(f"Logging to {log_path.resolve()} (terminal level {level})")
    return logger
