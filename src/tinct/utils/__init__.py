"""Utility modules for Tinct.

Provides:
- logger: get_logger for logging
"""

from tinct.utils.logger import get_logger

__all__ = [
    "get_logger",
]
