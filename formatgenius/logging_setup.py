"""
Logging configuration for FormatGenius.

Sinks:
- stderr console, always on
- formatgenius.log, everything at DEBUG and above, rotated
- errors.log, ERROR and above only
- requests.log, records bound with ``request=True`` by the HTTP server

Usage:
    from formatgenius.logging_setup import init_from_config
    init_from_config()
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger

LOG_DIR = Path(__file__).parent.parent / '.data' / 'logs'

LOG_FILES = {
    'main': "formatgenius.log",
    'errors': "errors.log",
    'requests': "requests.log",
}

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level>"
)
CLI_FORMAT = "<level>{level: <8}</level> | <cyan>{message}</cyan>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"

_active_log_dir: Optional[Path] = None


def _add_file_sink(log_dir: Path, log_type: str, level: str, rotation_size_mb: int,
                   retention_count: int, **kwargs) -> None:
    logger.add(
        str(log_dir / LOG_FILES[log_type]),
        format=FILE_FORMAT,
        level=level,
        rotation=f"{rotation_size_mb} MB",
        retention=retention_count,
        compression="zip",
        enqueue=True,
        **kwargs,
    )


def setup_logging(
    log_level: str = "INFO",
    enable_file_logging: bool = True,
    rotation_size_mb: int = 10,
    retention_count: int = 5,
    verbose: bool = False,
    log_dir: Optional[Path] = None,
) -> Optional[Path]:
    """
    Configure the server-side loguru sinks. Only the first call has an effect.

    Args:
        log_level: Console level (DEBUG, INFO, WARNING, ERROR)
        enable_file_logging: Also write rotated log files
        rotation_size_mb: Size in MB before a log file rotates
        retention_count: Rotated files kept per log
        verbose: Force DEBUG on the console
        log_dir: Directory for log files (default .data/logs)

    Returns:
        Directory receiving log files, or None when file logging is off
    """
    global _active_log_dir

    if _active_log_dir is not None:
        return _active_log_dir

    logger.remove()
    effective_level = "DEBUG" if verbose else log_level.upper()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=effective_level, colorize=True)

    if not enable_file_logging:
        logger.info(f"FormatGenius logging initialized (level={effective_level}, console only)")
        return None

    log_dir = Path(log_dir or LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    _add_file_sink(log_dir, 'main', "DEBUG", rotation_size_mb, retention_count)
    _add_file_sink(log_dir, 'errors', "ERROR", rotation_size_mb, retention_count,
                   backtrace=True, diagnose=False)
    _add_file_sink(log_dir, 'requests', "INFO", rotation_size_mb, retention_count,
                   filter=lambda record: record["extra"].get("request", False))

    _active_log_dir = log_dir
    logger.info(f"FormatGenius logging initialized (level={effective_level}, dir={log_dir})")
    return log_dir


def configure_cli_logging(verbose: bool = False) -> None:
    """Console-only logging for the command line tool: warnings, or everything with -v."""
    logger.remove()
    logger.add(sys.stderr, format=CLI_FORMAT, level="DEBUG" if verbose else "WARNING")


def reset_logging() -> None:
    """Drop all sinks and allow setup_logging to run again."""
    global _active_log_dir
    logger.complete()
    logger.remove()
    _active_log_dir = None


def get_log_directory() -> Path:
    """Directory currently receiving log files (the default one before setup)."""
    return _active_log_dir or LOG_DIR


def get_recent_logs(max_lines: int = 100, log_type: str = "main") -> str:
    """
    Tail one of the log files.

    Args:
        max_lines: Maximum number of lines to return
        log_type: "main", "errors" or "requests"; anything else reads the main log
    """
    log_file = get_log_directory() / LOG_FILES.get(log_type, LOG_FILES['main'])
    if not log_file.exists():
        return "No log file found."

    try:
        with open(log_file, 'r', encoding='utf-8') as f:
            lines = f.readlines()
    except OSError as e:
        return f"Error reading log file: {e}"
    if max_lines <= 0:
        return ''
    return ''.join(lines[-max_lines:])


def log_document_operation(operation: str, file_name: str, details: dict = None) -> None:
    """
    Record one step of handling an uploaded document in the request log.

    Args:
        operation: upload, format, reject
        file_name: Client-supplied file name
        details: Extra fields (style, sizes, pipeline summary)
    """
    fields = dict(details or {})
    fields.update(operation=operation, file_name=file_name, timestamp=datetime.now().isoformat())
    logger.bind(request=True, **fields).info(f"Document {operation}: {file_name} | {fields}")


def init_from_config() -> Optional[Path]:
    """Initialize server logging from config settings."""
    from formatgenius.config import config
    return setup_logging(
        log_level=config.LOG_LEVEL,
        enable_file_logging=config.ENABLE_FILE_LOGGING,
        rotation_size_mb=config.LOG_ROTATION_SIZE_MB,
        retention_count=config.LOG_RETENTION_COUNT,
        verbose=config.VERBOSE,
    )


__all__ = [
    'setup_logging',
    'configure_cli_logging',
    'reset_logging',
    'get_log_directory',
    'get_recent_logs',
    'log_document_operation',
    'init_from_config',
]
