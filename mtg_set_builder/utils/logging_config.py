# mtg_set_builder/utils/logging_config.py

"""
logging_config.py

Centralized logging configuration for applications built on mtg_set_builder.
The library modules only create module loggers; call setup_logging() once from
the application entry point to attach handlers.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DIRECTORY = "logs"
LOG_FILE_NAME = "mtg_set_builder.log"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_log_level(level_name):
    """Convert string log level to numeric log level"""
    return LOG_LEVELS.get(str(level_name).upper(), DEFAULT_LOG_LEVEL)


def setup_logging(app_config=None, log_to_file=None, log_to_console=True, log_dir=LOG_DIRECTORY):
    """
    Configure the root logger.

    Args:
        app_config: AppConfig with a [Logging] section, or None for defaults
        log_to_file: Whether to log to a rotating file. Read from
            ``[Logging] log_to_file`` when None.
        log_to_console: Whether to log to stdout
        log_dir: Directory for the log file

    Returns:
        logging.Logger: Configured root logger
    """
    log_level = DEFAULT_LOG_LEVEL
    if app_config is not None:
        log_level = get_log_level(app_config.get("Logging", "log_level", "INFO"))
        if log_to_file is None:
            log_to_file = app_config.get_bool("Logging", "log_to_file", False)
    log_to_file = bool(log_to_file)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(DEFAULT_LOG_FORMAT)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_to_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        log_file = os.path.join(log_dir, LOG_FILE_NAME)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=10_485_760, backupCount=5  # 10 MB
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    return root_logger


def get_logger(name):
    """
    Get a logger for a specific module.

    Args:
        name: Name of the module requesting the logger

    Returns:
        logging.Logger: Logger for the specified module
    """
    return logging.getLogger(name)
