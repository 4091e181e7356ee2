"""
Invoice Summary Module.

Condenses the records of one extracted document into a single summary
row, the shape consumers use for caching and approval lists.

Author: I2E Development Team
"""

from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

from i2e.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


def normalize_invoice_date(date_str: Optional[str]) -> Optional[str]:
    """
    Convert a DD.MM.YYYY / DD/MM/YYYY invoice date to ISO format.

    Example:
        >>> normalize_invoice_date("05.03.2024")
        '2024-03-05'
    """
    if not date_str:
        return None

    try:
        return date_parser.parse(date_str, dayfirst=True).date().isoformat()
    except (ValueError, OverflowError):
        logger.debug(f"Could not parse invoice date: {date_str}")
        return None


def line_item_sum(records: List[Dict[str, Any]]) -> float:
    """Sum of the positionTotal values present in the records."""
    return round(sum(r.get('positionTotal') or 0 for r in records), 2)


def extract_invoice_summary(records: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Summarize the records of one document.

    The total is the extracted invoice total when present, otherwise the
    sum of the line-item totals.

    Args:
        records: Output records of a single document.

    Returns:
        Summary dictionary, or an empty dict for no records.
    """
    if not records:
        return {}

    first = records[0]
    total_amount = first.get('extractedInvoiceTotal')
    if not total_amount:
        total_amount = line_item_sum(records)

    line_item_count = sum(1 for r in records if 'position' in r)

    return {
        'projectId': first.get('projectId'),
        'invoiceNumber': first.get('invoiceNumber'),
        'customerId': first.get('customerId'),
        'fileName': first.get('fileName'),
        'invoiceDate': first.get('dateOfInvoice'),
        'invoiceDateIso': normalize_invoice_date(first.get('dateOfInvoice')),
        'monthOfInvoice': first.get('monthOfInvoice'),
        'currency': first.get('currency'),
        'totalAmount': total_amount,
        'creditNote': first.get('creditNote', False),
        'lineItemCount': line_item_count,
    }
