"""
Header Field Extraction Module.

Resolves document-level invoice fields (project ID, invoice number,
customer ID, invoice date, currency, VAT ID) by applying ordered,
field-specific regular expressions to the full document text.

Author: I2E Development Team
"""

import re
from typing import Optional

from i2e.utils.logger import get_logger
from .classifiers import detect_credit_note
from .models import InvoiceHeader

# Initialize module logger
logger = get_logger(__name__)

MONTH_NAMES = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December'
)

_DATE = r'(\d{1,2}[./]\d{1,2}[./]\d{4})'

# First match wins within each list; group 1 is the field value.
# Labels are case-insensitive, captured codes are not.
FIELD_PATTERNS = {
    'projectId': (
        re.compile(r'([A-Z]{2}\d{2}-PRO\d{7})'),
        re.compile(r'(PRO\d{7})'),
        re.compile(r'([A-Z]{2}-PRO\d{7})'),
    ),
    'invoiceNumber': (
        re.compile(r'Invoice\s+No\.?\s*:?\s*(\d+)', re.IGNORECASE),
        re.compile(r'Credit\s+Note\s+No\.?\s*:?\s*(\d+)', re.IGNORECASE),
        re.compile(r'Invoice\s+Number\s*:?\s*(\d+)', re.IGNORECASE),
    ),
    'customerId': (
        re.compile(r'Customer\s+ID\s*:?\s*(\d+)', re.IGNORECASE),
        re.compile(r'Client\s+ID\s*:?\s*(\d+)', re.IGNORECASE),
    ),
    'dateOfInvoice': (
        re.compile(r'Invoice\s+Date\s*:?\s*' + _DATE, re.IGNORECASE),
        re.compile(r'Date\s*:?\s*' + _DATE, re.IGNORECASE),
        re.compile(r'\b' + _DATE + r'\b'),
    ),
    'currency': (
        re.compile(r'(?i:Currency)\s*:?\s*([A-Z]{3})\b'),
        re.compile(r'\b(EUR|USD|GBP)\b'),
    ),
    'vat': (
        re.compile(r'(?i:VAT\s*ID)\s*:?\s*([A-Z0-9]+)'),
        re.compile(r'(?i:BTW)\s*:?\s*([A-Z0-9]+)'),
    ),
}


def extract_field(text: str, field_name: str) -> Optional[str]:
    """
    Extract a single header field from the document text.

    Args:
        text: Full document text.
        field_name: One of the keys of FIELD_PATTERNS.

    Returns:
        First captured value, or None if no pattern matches.

    Raises:
        ValueError: If field_name is not a known header field.
    """
    try:
        patterns = FIELD_PATTERNS[field_name]
    except KeyError:
        raise ValueError(f"Unknown header field: {field_name}") from None

    for pattern in patterns:
        match = pattern.search(text or '')
        if match:
            return match.group(1)
    return None


def month_of_invoice(date_str: Optional[str]) -> Optional[str]:
    """
    Derive the full month name from a DD.MM.YYYY style date.

    Example:
        >>> month_of_invoice("15.03.2024")
        'March'
        >>> month_of_invoice("garbage") is None
        True
    """
    if not date_str:
        return None

    parts = re.split(r'[./-]', date_str)
    if len(parts) < 3 or not parts[1].isdigit():
        return None

    month = int(parts[1])
    if 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return None


def extract_header(full_text: str, file_name: str) -> InvoiceHeader:
    """
    Build the document header from the full concatenated text.

    Args:
        full_text: All page texts joined in page order.
        file_name: Source file name.

    Returns:
        InvoiceHeader with unmatched fields left as None.
    """
    date_of_invoice = extract_field(full_text, 'dateOfInvoice')

    header = InvoiceHeader(
        file_name=file_name,
        project_id=extract_field(full_text, 'projectId'),
        invoice_number=extract_field(full_text, 'invoiceNumber'),
        customer_id=extract_field(full_text, 'customerId'),
        date_of_invoice=date_of_invoice,
        month_of_invoice=month_of_invoice(date_of_invoice),
        currency=extract_field(full_text, 'currency'),
        vat=extract_field(full_text, 'vat'),
        credit_note=detect_credit_note(full_text),
    )

    logger.debug(
        f"Header for {file_name}: invoice={header.invoice_number}, "
        f"project={header.project_id}, date={header.date_of_invoice}"
    )
    return header
