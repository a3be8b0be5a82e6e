"""
Logging configuration for the execution hooks.

This module builds the dictConfig used by the LoggerManager. Console output is
always enabled; rotating log files are added when a log directory is given.
"""

import logging
import logging.config
import os
import sys
from datetime import datetime
from typing import Dict, Any, Optional

# Log file naming
current_date = datetime.now().strftime("%Y-%m-%d")
log_filename = f"hooks.{current_date}.log"
error_log_filename = f"hooks.error.{current_date}.log"

# Log formatting
VERBOSE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

DOMAIN_LOGGERS = ("system", "hooks")


def _rotating_handler(filename: str, level: str) -> Dict[str, Any]:
    return {
        "level": level,
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "verbose",
        "filename": filename,
        "maxBytes": 10485760,  # 10 MB
        "backupCount": 5,
        "encoding": "utf-8",
    }


def get_logging_config(
    env: str = "development",
    log_dir: Optional[str] = None,
    level: str = "INFO",
) -> Dict[str, Any]:
    """
    Returns logging configuration based on environment.

    Args:
        env: The environment. One of development, staging, production.
        log_dir: Directory for rotating log files, console only when None.
        level: Level applied to the domain loggers.

    Returns:
        Dict with logging configuration.
    """
    is_dev = env.lower() == "development"
    level = level.upper()

    handlers: Dict[str, Any] = {
        "console": {
            "level": "DEBUG" if is_dev else "INFO",
            "class": "logging.StreamHandler",
            "formatter": "simple" if is_dev else "verbose",
            "stream": sys.stdout,
        },
    }
    domain_handlers = ["console"]

    if log_dir:
        handlers["file"] = _rotating_handler(os.path.join(log_dir, log_filename), "INFO")
        handlers["error_file"] = _rotating_handler(os.path.join(log_dir, error_log_filename), "ERROR")
        handlers["sqlalchemy_file"] = _rotating_handler(os.path.join(log_dir, "sqlalchemy.log"), "INFO")
        domain_handlers = ["console", "file", "error_file"]

    loggers: Dict[str, Any] = {
        name: {
            "handlers": domain_handlers,
            "level": level,
            "propagate": False,
        }
        for name in DOMAIN_LOGGERS
    }
    # Keep SQL statements out of the console
    loggers["sqlalchemy.engine"] = {
        "handlers": ["sqlalchemy_file"] if log_dir else [],
        "level": "WARNING",
        "propagate": False,
    }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "verbose": {
                "format": VERBOSE_FORMAT
            },
            "simple": {
                "format": SIMPLE_FORMAT
            },
        },
        "handlers": handlers,
        "loggers": loggers,
    }


def setup_logging(env: str = "development", log_dir: Optional[str] = None, level: str = "INFO") -> None:
    """
    Sets up logging configuration for the hooks.

    Args:
        env: The environment. One of development, staging, production.
        log_dir: Optional directory for log files.
        level: Level applied to the domain loggers.
    """
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    logging.config.dictConfig(get_logging_config(env, log_dir, level))

    logger = logging.getLogger("system")
    logger.debug(f"Logging configured for {env} environment")
