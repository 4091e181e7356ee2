"""
Output Handler Module for the I2E invoice processor.

This module provides functionality for:
    - Writing records as JSON
    - Writing records as CSV
"""

from .handler import OutputHandler

__all__ = [
    'OutputHandler'
]
