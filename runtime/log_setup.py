"""Logging configuration for scripts embedding the FusionCompute client."""

from __future__ import annotations

import logging
import os

from runtime.log_sanitizer import SensitiveDataFormatter

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def setup_logging(min_log_level=logging.INFO, logs_dir="logs"):
    """
    Sets up logging to separate files for each log level.
    Only logs from the specified `min_log_level` and above are saved in their respective files.
    Includes console logging for the same log levels.

    :param min_log_level: Minimum log level to log. Defaults to logging.INFO.
    :param logs_dir: Directory receiving one <level>.log file per level.
    """
    if not os.path.exists(logs_dir):
        os.makedirs(logs_dir)

    if not os.access(logs_dir, os.W_OK):
        raise PermissionError(f"Cannot write to log directory: {logs_dir}")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all log levels

    log_format = SensitiveDataFormatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")

    for level_name, level_value in LOG_LEVELS.items():
        if level_value >= min_log_level:
            log_file = os.path.join(logs_dir, f"{level_name.lower()}.log")
            handler = logging.FileHandler(log_file)
            handler.setLevel(level_value)
            handler.setFormatter(log_format)

            # Only records of exactly this level go to this file
            handler.addFilter(lambda record, lv=level_value: record.levelno == lv)
            root_logger.addHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(min_log_level)
    console_handler.setFormatter(log_format)
    root_logger.addHandler(console_handler)

    logging.info(f"Logging is set up. Minimum log level: {logging.getLevelName(min_log_level)}")
