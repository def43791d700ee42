"""
Minimal structured logging configuration for salesforecast.

Provides:
- Console logging (warnings and above by default)
- Optional file logging with automatic rotation
"""
import logging
import logging.handlers
from pathlib import Path
from datetime import datetime
from typing import Optional, Union


LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(
    log_dir: Optional[Union[str, Path]] = None,
    app_name: str = "salesforecast",
    console_level: int = logging.WARNING,
) -> logging.Logger:
    """
    Setup logging for the application logger.

    Args:
        log_dir: Directory for rotating log files (created if missing).
                 When None, only console logging is configured.
        app_name: Application name for logger (also the package logger, so
                  module loggers propagate to it)
        console_level: Minimum level printed to stderr

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        # File handler: rotating log (max 5MB, keep 3 backups)
        log_file = log_path / f"{app_name}_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=3,
            encoding='utf-8',
        )
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
