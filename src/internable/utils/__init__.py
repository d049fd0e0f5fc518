"""Utility modules for internable.

Provides:
- logger: get_logger for logging
"""

from internable.utils.logger import get_logger

__all__ = [
    "get_logger",
]
