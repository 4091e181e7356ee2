"""
Utility Module for the I2E invoice processor.

This module provides common utilities used across all other modules:
    - Logging configuration
    - Exceptions
    - File helpers
"""

from .logger import setup_logger, get_logger, enable_trace
from .helpers import ensure_directory, get_file_extension, generate_timestamp

__all__ = [
    'setup_logger',
    'get_logger',
    'enable_trace',
    'ensure_directory',
    'get_file_extension',
    'generate_timestamp'
]
