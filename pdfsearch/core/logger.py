"""
Logging setup for folder searches.

Search workers, the extraction backends and the CLI all log through the
root logger configured here: a console handler on stderr, so the result
listing and progress bar printed on stdout stay readable, and a rotating
file under the configured logs directory. The format includes the thread
name because documents are searched on a worker pool.

pypdf and pdfminer (used by pdfplumber) log every malformed object they
recover from; their loggers are held at WARNING or above so a DEBUG run
over a large folder stays about the search itself.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path


LOG_FILENAME = "document_search.log"

PDF_LIBRARY_LOGGERS = ("pypdf", "pdfminer")

_logger_initialized = False


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s",
    logs_directory: Path = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5
) -> None:
    """
    Initialize the root logger once per process.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Format string for log messages.
        logs_directory: Directory for document_search.log. None disables file logging.
        max_file_size_mb: Size at which the log file is rotated.
        backup_count: Number of rotated files to keep.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if logs_directory:
        logs_directory = Path(logs_directory)
        logs_directory.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            logs_directory / LOG_FILENAME,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for name in PDF_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    _logger_initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger, configuring logging from config.json on first use.

    Falls back to console-only defaults when the config cannot be loaded,
    so importing a module never fails because of logging.
    """
    if not _logger_initialized:
        try:
            from .config_loader import get_config
            config = get_config()
            setup_logging(
                log_level=config.logging.level,
                log_format=config.logging.format,
                logs_directory=config.paths.logs_directory,
                max_file_size_mb=config.logging.max_file_size_mb,
                backup_count=config.logging.backup_count
            )
        except Exception:
            setup_logging()

    return logging.getLogger(name)
