"""
Custom Exceptions Module.

This module defines the exceptions raised by the I2E invoice processor.
The extraction engine itself is best-effort and reports missing data as
None or sentinels; exceptions are reserved for a malformed input contract,
configuration problems and output failures.

Exception Hierarchy:
    InvoiceExtractionError (base)
    ├── InputError
    │   ├── UnsupportedFileTypeError
    │   ├── CorruptedFileError
    │   ├── MalformedPageTextError
    │   └── EmptyDocumentError
    ├── ConfigurationError
    └── OutputError
        └── ExportError
"""


class InvoiceExtractionError(Exception):
    """
    Base exception for all I2E errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        shown = {k: v for k, v in self.details.items() if v is not None}
        if shown:
            return f"{self.message} | Details: {shown}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(InvoiceExtractionError):
    """Base exception for input handling errors."""

    @property
    def file_name(self):
        """File the error is tagged with, if any."""
        return self.details.get("file_name") or self.details.get("filepath")


class UnsupportedFileTypeError(InputError):
    """
    Raised when an unsupported file type is provided.

    Example:
        >>> raise UnsupportedFileTypeError(".pdf", [".json", ".txt"])
    """

    def __init__(self, file_type: str, supported_types: list):
        message = f"Unsupported file type: '{file_type}'"
        details = {"file_type": file_type, "supported_types": supported_types}
        super().__init__(message, details)


class CorruptedFileError(InputError):
    """Raised when a page-text file cannot be read or decoded."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Cannot read page-text file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


class MalformedPageTextError(InputError):
    """Raised when the page-text list is not a list of strings."""

    def __init__(self, file_name: str, reason: str = None):
        message = f"Malformed page text for: {file_name}"
        details = {"file_name": file_name, "reason": reason}
        super().__init__(message, details)


class EmptyDocumentError(InputError):
    """Raised when a document has no pages or only blank pages."""

    def __init__(self, file_name: str, page_count: int = 0):
        message = f"Document has no text content: {file_name}"
        details = {"file_name": file_name, "page_count": page_count}
        super().__init__(message, details)


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(InvoiceExtractionError):
    """Raised when the settings file is missing or invalid."""

    def __init__(self, config_path: str, reason: str = None):
        message = f"Invalid configuration: {config_path}"
        details = {"config_path": config_path, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# OUTPUT ERRORS
# =============================================================================

class OutputError(InvoiceExtractionError):
    """Base exception for output handling errors."""
    pass


class ExportError(OutputError):
    """Raised when writing records to disk fails."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to export records: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


__all__ = [
    'InvoiceExtractionError',
    'InputError',
    'UnsupportedFileTypeError',
    'CorruptedFileError',
    'MalformedPageTextError',
    'EmptyDocumentError',
    'ConfigurationError',
    'OutputError',
    'ExportError',
]
