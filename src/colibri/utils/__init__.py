"""Utility modules for Colibri.

Provides:
- logger: get_logger for logging
"""

from colibri.utils.logger import get_logger

__all__ = [
    "get_logger",
]
