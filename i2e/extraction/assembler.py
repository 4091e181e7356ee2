"""
Invoice Record Assembly.

Merges the document header, the resolved invoice total and the line items
of all pages into the flat records of the output contract.
"""

from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence

from i2e.utils.logger import get_logger
from .models import InvoiceHeader, LineItem

logger = get_logger(__name__)


def stamp_invoice_total(
    line_items: Sequence[LineItem],
    invoice_total: Optional[float]
) -> List[LineItem]:
    """Give every line item the same document-wide invoice total."""
    return [replace(item, extracted_invoice_total=invoice_total) for item in line_items]


def merge_record(header: InvoiceHeader, item: LineItem) -> Dict[str, Any]:
    """
    Merge one line item with the header fields.

    Header fields come first and win on name collisions (``vat``).
    """
    record = header.to_dict()
    for key, value in item.to_dict().items():
        record.setdefault(key, value)
    return record


def assemble_records(
    header: InvoiceHeader,
    line_items: Sequence[LineItem],
    invoice_total: Optional[float]
) -> List[Dict[str, Any]]:
    """
    Build the final records of one document.

    Args:
        header: Document header.
        line_items: Items of all pages, in page then extraction order.
        invoice_total: Cross-page resolved total, possibly None.

    Returns:
        One record per line item, or a single header-only record when no
        line item was found on any page.
    """
    if not line_items:
        logger.debug(f"No line items in {header.file_name}, emitting header-only record")
        record = header.to_dict()
        record['extractedInvoiceTotal'] = invoice_total
        return [record]

    return [merge_record(header, item) for item in stamp_invoice_total(line_items, invoice_total)]
