"""
Invoice Text Extractor Module.

This module provides the InvoiceTextExtractor class, the entry point of
the extraction engine. It takes the reading-order text of every page of
one invoice and returns the structured records.

Pipeline:
    1. Validate the page-text input contract
    2. Extract the document header from the full text
    3. Per page, in order: service period, total candidates, line items
    4. Resolve one invoice total across all pages
    5. Assemble the records

The engine is synchronous and keeps no state between documents; an
extractor instance only holds its read-only tunables, so one instance
may serve concurrent callers.

Author: I2E Development Team
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from config import get_config
from i2e.utils.exceptions import EmptyDocumentError, MalformedPageTextError
from i2e.utils.logger import get_logger
from .assembler import assemble_records
from .header import extract_header
from .line_items import DEFAULT_MIN_LINE_LENGTH, extract_line_items
from .models import InvoiceHeader, LineItem, TotalCandidate, UNKNOWN_PERIOD
from .service_period import resolve_service_period
from .totals import (
    DEFAULT_AMOUNT_WINDOW,
    DEFAULT_LOOKAHEAD_LINES,
    DEFAULT_MIN_AMOUNT,
    collect_total_candidates,
    resolve_invoice_total,
)

# Initialize module logger
logger = get_logger(__name__)


@dataclass
class DocumentExtraction:
    """
    Intermediate results of one document, kept for diagnostics.

    Attributes:
        header: Document header
        service_periods: Resolved period per page, in page order
        total_candidates: Pooled candidates of all pages
        line_items: Line items of all pages, in page order
        invoice_total: Resolved invoice total
        records: Final output records
    """
    header: InvoiceHeader
    service_periods: List[str] = field(default_factory=list)
    total_candidates: List[TotalCandidate] = field(default_factory=list)
    line_items: List[LineItem] = field(default_factory=list)
    invoice_total: Optional[float] = None
    records: List[Dict[str, Any]] = field(default_factory=list)


def validate_page_texts(page_texts: Any, file_name: str) -> List[str]:
    """
    Check the page-text input contract.

    Args:
        page_texts: Ordered page texts of one document.
        file_name: Source file name used to tag errors.

    Returns:
        The page texts as a list.

    Raises:
        MalformedPageTextError: If page_texts is not a sequence of strings.
        EmptyDocumentError: If there are no pages or every page is blank.
    """
    if isinstance(page_texts, (str, bytes)) or not isinstance(page_texts, (list, tuple)):
        raise MalformedPageTextError(
            file_name, f"expected a list of page strings, got {type(page_texts).__name__}"
        )

    for index, page in enumerate(page_texts):
        if not isinstance(page, str):
            raise MalformedPageTextError(
                file_name, f"page {index + 1} is {type(page).__name__}, not str"
            )

    if not page_texts or not any(page.strip() for page in page_texts):
        raise EmptyDocumentError(file_name, len(page_texts))

    return list(page_texts)


class InvoiceTextExtractor:
    """
    Heuristic extractor for machine-readable invoice text.

    Tunables are read from configuration once, at construction; explicit
    arguments override the configured values.

    Attributes:
        amount_window: Characters after a Total keyword searched for amounts
        lookahead_lines: Lines below a Total keyword searched for amounts
        min_amount: Totals at or below this absolute value are noise
        min_line_length: Minimum length of a line-item row
        unknown_period: Sentinel for pages without a service period

    Example:
        >>> extractor = InvoiceTextExtractor()
        >>> records = extractor.extract(["Invoice No. 123\\nTotal 1.234,56"], "inv.pdf")
        >>> records[0]["extractedInvoiceTotal"]
        1234.56
    """

    def __init__(
        self,
        amount_window: Optional[int] = None,
        lookahead_lines: Optional[int] = None,
        min_amount: Optional[float] = None,
        min_line_length: Optional[int] = None,
        unknown_period: Optional[str] = None
    ) -> None:
        self.amount_window = self._setting(
            amount_window, "extraction.totals.amount_window", DEFAULT_AMOUNT_WINDOW
        )
        self.lookahead_lines = self._setting(
            lookahead_lines, "extraction.totals.lookahead_lines", DEFAULT_LOOKAHEAD_LINES
        )
        self.min_amount = self._setting(
            min_amount, "extraction.totals.min_amount", DEFAULT_MIN_AMOUNT
        )
        self.min_line_length = self._setting(
            min_line_length, "extraction.line_items.min_line_length", DEFAULT_MIN_LINE_LENGTH
        )
        self.unknown_period = self._setting(
            unknown_period, "extraction.service_period.unknown", UNKNOWN_PERIOD
        )

        logger.debug(
            f"InvoiceTextExtractor initialized (window={self.amount_window}, "
            f"lookahead={self.lookahead_lines}, min_amount={self.min_amount})"
        )

    @staticmethod
    def _setting(value: Any, key: str, default: Any) -> Any:
        if value is not None:
            return value
        return get_config(key, default)

    def extract(self, page_texts: Sequence[str], file_name: str) -> List[Dict[str, Any]]:
        """
        Extract the records of one document.

        Args:
            page_texts: Ordered page texts.
            file_name: Source file name.

        Returns:
            One record per line item, or one header-only record.

        Raises:
            MalformedPageTextError: If page_texts is not a list of strings.
            EmptyDocumentError: If the document has no text.
        """
        return self.extract_document(page_texts, file_name).records

    def extract_document(self, page_texts: Sequence[str], file_name: str) -> DocumentExtraction:
        """Run the pipeline and keep the intermediate results."""
        pages = validate_page_texts(page_texts, file_name)
        full_text = '\n'.join(pages)

        document = DocumentExtraction(header=extract_header(full_text, file_name))

        for page_index, page_text in enumerate(pages):
            page_number = page_index + 1

            period = resolve_service_period(page_text, unknown=self.unknown_period)
            document.service_periods.append(period)

            document.total_candidates.extend(collect_total_candidates(
                page_text,
                page_number,
                amount_window=self.amount_window,
                lookahead_lines=self.lookahead_lines,
                min_amount=self.min_amount,
            ))

            document.line_items.extend(extract_line_items(
                page_text,
                page_number,
                service_period=period,
                min_line_length=self.min_line_length,
            ))

        document.invoice_total = resolve_invoice_total(document.total_candidates, full_text)
        document.records = assemble_records(
            document.header, document.line_items, document.invoice_total
        )

        logger.debug(
            f"{file_name}: {len(pages)} pages, {len(document.line_items)} line items, "
            f"total={document.invoice_total}"
        )
        return document


def extract_invoice_data(page_texts: Sequence[str], file_name: str) -> List[Dict[str, Any]]:
    """
    Extract the records of one document with the default tunables.

    Configuration is not consulted, which keeps this entry point usable
    without a settings file.
    """
    extractor = InvoiceTextExtractor(
        amount_window=DEFAULT_AMOUNT_WINDOW,
        lookahead_lines=DEFAULT_LOOKAHEAD_LINES,
        min_amount=DEFAULT_MIN_AMOUNT,
        min_line_length=DEFAULT_MIN_LINE_LENGTH,
        unknown_period=UNKNOWN_PERIOD,
    )
    return extractor.extract(page_texts, file_name)
