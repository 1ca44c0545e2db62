"""
purecrypto Configuration

Centralized runtime settings. Values come from environment variables
so applications embedding the library can tune logging and padding
behaviour without code changes.

Usage:
    from purecrypto.config import CONFIG

    cipher = AES256(strict_padding=CONFIG.strict_padding)

Environment:
    PURECRYPTO_LOG_LEVEL       DEBUG / INFO / WARNING / ERROR (default WARNING)
    PURECRYPTO_LOG_DIR         directory for log files (default: console only)
    PURECRYPTO_STRICT_PADDING  "1" to validate every PKCS#7 padding byte
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional


_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class CryptoConfig:
    """
    Library-wide settings.

    Attributes:
        log_level: Minimum level for purecrypto loggers
        log_dir: Optional directory for per-logger log files
        strict_padding: Reject ciphertexts whose padding bytes disagree
            with the final pad-length byte (off by default)
    """
    log_level: int = logging.WARNING
    log_dir: Optional[str] = None
    strict_padding: bool = False


def load_config(environ: Optional[dict] = None) -> CryptoConfig:
    """Build a CryptoConfig from environment variables."""
    env = os.environ if environ is None else environ

    level_name = env.get("PURECRYPTO_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING

    strict = env.get("PURECRYPTO_STRICT_PADDING", "0").strip().lower() in _TRUE_VALUES

    return CryptoConfig(
        log_level=level,
        log_dir=env.get("PURECRYPTO_LOG_DIR") or None,
        strict_padding=strict,
    )


CONFIG = load_config()
