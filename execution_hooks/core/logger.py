"""
Centralized logger management.

Every module asks the LoggerManager singleton for its domain logger instead of
configuring logging on its own, so the handlers are set up exactly once.
"""

import logging
import threading
from pathlib import Path
from typing import Optional

from execution_hooks.config.logging import setup_logging


class LoggerManager:
    """Singleton owning the logging configuration and the domain loggers."""

    _instance: Optional["LoggerManager"] = None
    _lock = threading.Lock()

    def __init__(self, log_dir: Optional[str] = None):
        self._log_dir: Optional[Path] = Path(log_dir) if log_dir else None
        self._initialized = False

    @classmethod
    def get_instance(cls, log_dir: Optional[str] = None) -> "LoggerManager":
        """
        Return the shared manager, creating it on first use.

        Args:
            log_dir: Log directory, only honoured when the manager is created.
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls(log_dir)
        return cls._instance

    def initialize(self, log_dir: Optional[str] = None) -> None:
        """
        Apply the logging configuration.

        Args:
            log_dir: Overrides the directory given at construction time.
        """
        from execution_hooks.config.settings import settings

        if log_dir:
            self._log_dir = Path(log_dir)
        elif self._log_dir is None and settings.LOG_DIR:
            self._log_dir = Path(settings.LOG_DIR)

        setup_logging(
            env=settings.ENVIRONMENT,
            log_dir=str(self._log_dir) if self._log_dir else None,
            level=settings.LOG_LEVEL,
        )
        self._initialized = True

    @property
    def system(self) -> logging.Logger:
        return logging.getLogger("system")

    @property
    def hooks(self) -> logging.Logger:
        return logging.getLogger("hooks")
