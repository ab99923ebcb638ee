"""Logging configuration setup."""

import copy
import logging
import logging.config
import os
import sys
from datetime import datetime
from typing import Tuple

from flagwarden.constants import LOG_DIR

BASE_LOG_CFG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple_file": {
            "format": ("%(asctime)s - %(name)25s:%(lineno)-4d - " "%(levelname)-7s - %(message)s"),
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "console": {
            "format": "%(levelname)s: %(message)s",
        },
    },
    "handlers": {
        "file_handler": {
            "class": "logging.FileHandler",
            "level": "DEBUG",
            "formatter": "simple_file",
            "filename": "temp_log_name.log",
            "encoding": "utf-8",
        },
        "console_handler": {
            "class": "logging.StreamHandler",
            "level": "ERROR",
            "formatter": "console",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "flagwarden": {
            "handlers": ["file_handler", "console_handler"],
            "propagate": False,
            "level": "INFO",
        },
        "flagwarden.core": {
            "handlers": ["file_handler", "console_handler"],
            "propagate": False,
            "level": "INFO",
        },
        "flagwarden.config": {
            "handlers": ["file_handler", "console_handler"],
            "propagate": False,
            "level": "INFO",
        },
    },
    "root": {
        "handlers": ["file_handler"],
        "level": "WARNING",
    },
}

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(log_lvl_str: str, *, quiet: bool = False) -> Tuple[str, str]:
    """
    Set up the logging system.

    Every run logs to its own timestamped file under ``logs/``; errors
    are echoed to stderr as well.

    Args:
        log_lvl_str: The desired log level string (e.g., 'debug', 'info').
        quiet: If *True*, suppress the status ``print()``.

    Returns:
        A tuple of (log_file_path, validated_log_level).
    """
    log_lvl_valid = log_lvl_str.upper()
    if log_lvl_valid not in _VALID_LEVELS:
        if not quiet:
            print(f"Warning: invalid log level '{log_lvl_str}'. Using 'WARNING'.")
        log_lvl_valid = "WARNING"

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    os.makedirs(LOG_DIR, exist_ok=True)
    log_fpath = os.path.join(LOG_DIR, f"flagwarden_{ts}_{log_lvl_valid}.log")

    log_cfg: dict = copy.deepcopy(BASE_LOG_CFG)
    log_cfg["handlers"]["file_handler"]["filename"] = log_fpath

    for name in log_cfg["loggers"]:
        log_cfg["loggers"][name]["level"] = log_lvl_valid
    log_cfg["root"]["level"] = log_lvl_valid if log_lvl_valid == "DEBUG" else "WARNING"

    try:
        logging.config.dictConfig(log_cfg)
        if not quiet:
            print(f"Logging initialized. File log level: {log_lvl_valid}, log file: {log_fpath}")
    except Exception as e_log_cfg:
        if not quiet:
            print(
                f"Error applying logging configuration: {e_log_cfg}",
                file=sys.stderr,
            )

    return log_fpath, log_lvl_valid
