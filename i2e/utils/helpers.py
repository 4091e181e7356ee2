"""
File helpers shared by the input and output handlers.
"""

from datetime import datetime
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def ensure_directory(path: PathLike) -> Path:
    """
    Create a directory (and its parents) if missing.

    Example:
        >>> ensure_directory("outputs/records")
        PosixPath('outputs/records')
    """
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def get_file_extension(filepath: PathLike) -> str:
    """
    Lowercase extension including the dot, "" when there is none.

    Example:
        >>> get_file_extension("invoice_4711.JSON")
        '.json'
    """
    return Path(filepath).suffix.lower()


def generate_timestamp(format_str: str = "%Y%m%d_%H%M%S") -> str:
    """Current local time formatted for file names."""
    return datetime.now().strftime(format_str)


def validate_file_exists(filepath: PathLike) -> bool:
    """True for an existing regular file."""
    return Path(filepath).is_file()
