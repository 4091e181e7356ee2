"""
Input Handler Module for the I2E invoice processor.

This module provides functionality for:
    - Loading page texts from .json and .txt files
    - Validating the page-text input contract
    - Collecting input files from directories
"""

from .handler import InputHandler, PageTextDocument

__all__ = [
    'InputHandler',
    'PageTextDocument'
]
