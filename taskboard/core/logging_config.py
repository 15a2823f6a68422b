"""
Logging setup for the Taskboard service.

``setup_logging()`` is called once by the server entry module. It installs a
console handler on the root logger, optionally mirrors everything to
``<LOG_FILE_DIR>/taskboard.log``, and pins the levels of the chattier
libraries. Unset arguments fall back to the server settings
(``TASKBOARD_LOG_LEVEL``, ``LOG_FORMAT``, ``LOG_FILE_DIR``,
``ENABLE_FILE_LOGGING``).
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FILE_NAME = "taskboard.log"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FORMATS = {
    "simple": "%(levelname)s %(name)s: %(message)s",
    "detailed": "%(asctime)s %(levelname)-8s %(name)s [%(filename)s:%(lineno)d] %(message)s",
    "json": (
        '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
        '"line": %(lineno)d, "message": "%(message)s"}'
    ),
}
DEFAULT_LOG_FORMAT = "detailed"

# Applied after the handlers are installed
LOGGER_LEVELS = {
    "taskboard": "INFO",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "aiosqlite": "WARNING",
    "asyncio": "WARNING",
    "uvicorn.access": "INFO",
}


def _resolve(log_level, log_format, enable_file, log_file_dir):
    # Settings are read at call time, not when taskboard.core is imported
    from taskboard.server.core.config import settings

    return (
        (log_level or settings.log_level).upper(),
        log_format or settings.log_format,
        settings.enable_file_logging if enable_file is None else enable_file,
        Path(log_file_dir or settings.log_file_dir),
    )


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: Optional[bool] = None,
    log_file_dir: Optional[str] = None,
) -> None:
    """
    Configure the root logger. Calling it again replaces the previous handlers.

    Args:
        log_level: Console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: One of ``LOG_FORMATS``; unknown names use the detailed format
        enable_file: Also write DEBUG and above to the log file
        log_file_dir: Directory for the log file
    """
    level, fmt, file_logging, file_dir = _resolve(log_level, log_format, enable_file, log_file_dir)
    formatter = logging.Formatter(LOG_FORMATS.get(fmt, LOG_FORMATS[DEFAULT_LOG_FORMAT]), datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if file_logging:
        file_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_dir / LOG_FILE_NAME)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for name, name_level in LOGGER_LEVELS.items():
        logging.getLogger(name).setLevel(name_level)

    root_logger.info(f"Logging configured: level={level}, format={fmt}, file={file_logging}")


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (normally the caller's ``__name__``)."""
    return logging.getLogger(name)
