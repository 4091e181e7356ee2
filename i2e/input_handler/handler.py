"""
Main Input Handler Module.

This module provides the InputHandler class that loads the page text of
already laid-out invoices from disk. PDF decoding and glyph-to-line
layout happen upstream; this handler only reads their output.

Supported formats:
    - .json: a list of page strings, or {"fileName": ..., "pages": [...]}
    - .txt:  pages separated by a form feed (pdftotext convention)

Usage:
    from i2e.input_handler import InputHandler

    handler = InputHandler()
    document = handler.load("invoice_4711.json")

    # Process a directory
    documents = handler.load_batch("./page_texts/")
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from config import get_config
from i2e.utils.logger import get_logger
from i2e.utils.helpers import get_file_extension, validate_file_exists
from i2e.utils.exceptions import (
    InputError,
    UnsupportedFileTypeError,
    CorruptedFileError,
    MalformedPageTextError,
)

# Initialize module logger
logger = get_logger(__name__)


@dataclass
class PageTextDocument:
    """
    Page texts of one invoice, ready for extraction.

    Attributes:
        filepath: Path the pages were read from
        file_name: Name of the source invoice document
        page_texts: Ordered page texts
    """
    filepath: str
    file_name: str
    page_texts: List[str]

    @property
    def page_count(self) -> int:
        return len(self.page_texts)

    def __repr__(self) -> str:
        return (
            f"PageTextDocument(file_name='{self.file_name}', "
            f"pages={self.page_count})"
        )


class InputHandler:
    """
    Loader for page-text files.

    Attributes:
        supported_extensions: Set of accepted file extensions
        page_separator: Separator between pages in .txt files
        encoding: Text encoding of input files

    Example:
        >>> handler = InputHandler()
        >>> document = handler.load("inv.txt")
        >>> print(f"Loaded {document.page_count} pages")
    """

    DEFAULT_EXTENSIONS = {'.json', '.txt'}
    DEFAULT_PAGE_SEPARATOR = '\f'

    def __init__(
        self,
        page_separator: Optional[str] = None,
        encoding: Optional[str] = None
    ) -> None:
        self.supported_extensions = {
            ext.lower() for ext in
            get_config("input.supported_extensions", sorted(self.DEFAULT_EXTENSIONS))
        }
        self.page_separator = page_separator or get_config(
            "input.page_separator", self.DEFAULT_PAGE_SEPARATOR
        )
        self.encoding = encoding or get_config("input.encoding", "utf-8")

        logger.info(f"InputHandler initialized with extensions: {sorted(self.supported_extensions)}")

    def validate_file(self, filepath: Union[str, Path]) -> Path:
        """
        Validate that a file exists and has a supported extension.

        Raises:
            InputError: If the path is missing or not a file.
            UnsupportedFileTypeError: If the extension is not supported.
        """
        path = Path(filepath)

        if not validate_file_exists(path):
            raise InputError(f"File not found: {filepath}", {"filepath": str(filepath)})

        extension = get_file_extension(path)
        if extension not in self.supported_extensions:
            raise UnsupportedFileTypeError(extension, sorted(self.supported_extensions))

        logger.debug(f"File validated: {filepath}")
        return path

    def load(self, filepath: Union[str, Path]) -> PageTextDocument:
        """
        Load the page texts of one document.

        Args:
            filepath: Path to a .json or .txt page-text file.

        Returns:
            PageTextDocument with the ordered page texts.

        Raises:
            InputError: If the file is missing.
            UnsupportedFileTypeError: If the extension is not supported.
            CorruptedFileError: If the file cannot be decoded.
            MalformedPageTextError: If the content violates the contract.
        """
        path = self.validate_file(filepath)

        try:
            content = path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise CorruptedFileError(str(path), str(e)) from e

        if get_file_extension(path) == '.json':
            file_name, page_texts = self._parse_json(path, content)
        else:
            file_name, page_texts = self._parse_text(path, content)

        document = PageTextDocument(
            filepath=str(path),
            file_name=file_name,
            page_texts=page_texts,
        )
        logger.debug(f"Loaded {document}")
        return document

    def _parse_json(self, path: Path, content: str):
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise CorruptedFileError(str(path), f"Invalid JSON: {e}") from e

        file_name = self._default_file_name(path)
        if isinstance(data, dict):
            file_name = data.get('fileName') or file_name
            pages = data.get('pages')
        else:
            pages = data

        if not isinstance(pages, list):
            raise MalformedPageTextError(file_name, "'pages' must be a list of strings")
        return file_name, pages

    def _parse_text(self, path: Path, content: str):
        pages = content.split(self.page_separator)
        # pdftotext terminates the last page with a separator too
        if len(pages) > 1 and not pages[-1].strip():
            pages = pages[:-1]
        return self._default_file_name(path), pages

    @staticmethod
    def _default_file_name(path: Path) -> str:
        """Page text of "inv.pdf" is conventionally stored as "inv.json"."""
        return f"{path.stem}.pdf"

    def collect_files(self, input_path: Union[str, Path]) -> List[Path]:
        """
        List the supported files of a file or directory path, sorted.

        Raises:
            InputError: If the path does not exist.
        """
        path = Path(input_path)

        if path.is_file():
            return [self.validate_file(path)]

        if not path.is_dir():
            raise InputError(f"Input path not found: {input_path}", {"filepath": str(input_path)})

        files = sorted(
            p for p in path.iterdir()
            if p.is_file() and get_file_extension(p) in self.supported_extensions
        )

        if not files:
            logger.warning(f"No supported files found in: {path}")
        else:
            logger.info(f"Found {len(files)} files to process")
        return files

    def load_batch(self, input_path: Union[str, Path]) -> List[PageTextDocument]:
        """
        Load every supported file of a directory.

        Files that fail to load are logged and skipped.
        """
        documents = []
        for path in self.collect_files(input_path):
            try:
                documents.append(self.load(path))
            except InputError as e:
                logger.error(f"Skipping {path.name}: {e}")
        return documents
