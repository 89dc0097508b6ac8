"""
Utilities shared across the application.
"""

# Core utilities that have minimal dependencies
from .logging import get_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
]
