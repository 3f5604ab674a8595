"""Utility modules for Glint.

Provides:
- logger: get_logger for logging
"""

from glint.utils.logger import get_logger

__all__ = [
    "get_logger",
]
