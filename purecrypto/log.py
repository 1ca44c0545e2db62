"""
Centralized logger for purecrypto modules.

Provides console and optional file output with a consistent format.
Library code only logs at DEBUG level and never logs key material.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .config import CONFIG


class CryptoLogger:
    """
    Cached logger factory with console and file output.
    """

    _loggers = {}

    @staticmethod
    def get_logger(
        name: str,
        log_dir: Optional[str] = None,
        level: Optional[int] = None,
        console_output: bool = True,
    ) -> logging.Logger:
        """
        Get or create a configured logger.

        Args:
            name: Logger name (e.g. "purecrypto.ecc")
            log_dir: Directory for log files (defaults to CONFIG.log_dir)
            level: Minimum level (defaults to CONFIG.log_level)
            console_output: Also write to stderr

        Returns:
            Configured logger
        """
        if name in CryptoLogger._loggers:
            return CryptoLogger._loggers[name]

        if level is None:
            level = CONFIG.log_level
        if log_dir is None:
            log_dir = CONFIG.log_dir

        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False
        logger.handlers.clear()

        # [2026-10-18 14:30:45] [purecrypto.ecc] [DEBUG] message
        formatter = logging.Formatter(
            fmt="[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )

        if console_output:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        if log_dir:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_path / f"{name}.log", encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        CryptoLogger._loggers[name] = logger
        return logger

    @staticmethod
    def set_level(name: str, level: int):
        """Changes log level for an existing logger."""
        if name in CryptoLogger._loggers:
            logger = CryptoLogger._loggers[name]
            logger.setLevel(level)
            for handler in logger.handlers:
                handler.setLevel(level)

    @staticmethod
    def clear_cache():
        """Clears logger cache."""
        CryptoLogger._loggers.clear()
