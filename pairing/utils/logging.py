"""
Logging utilities for the device pairing gateway.

Provides standardized logger configuration following security and privacy rules.

CRITICAL SECURITY RULES:
- NEVER log the target account's password
- NEVER log a full OTP / Quickcode (use mask_secret)
- NEVER log raw page HTML or screenshots

Acceptable logging:
- High-level events (e.g., "Pairing started", "Login succeeded")
- Non-sensitive metadata (e.g., label='Kitchen TV', strategy='placeholder')
- Error kinds and sanitized error messages
"""

import logging
from typing import Optional


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger for the specified module.

    Records propagate to the root logger, whose handler and level are set
    once by logging.basicConfig in pairing.main (LOG_LEVEL).

    Args:
        name: Module name (typically __name__)
        level: Optional level override for this logger only

    Returns:
        Logger instance

    Usage:
        >>> from pairing.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)

    if level is not None:
        logger.setLevel(level)

    return logger


def mask_secret(value: str, visible: int = 2) -> str:
    """
    Mask all but the last `visible` characters of a secret.

    >>> mask_secret("123456")
    '****56'
    """
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]
