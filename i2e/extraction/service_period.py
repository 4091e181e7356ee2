"""
Service Period Resolution Module.

Determines the billing month a page covers. Resolution is independent
per page, so a multi-page invoice may carry different periods per page.
"""

import re

from i2e.utils.logger import get_logger
from .header import MONTH_NAMES
from .models import UNKNOWN_PERIOD

logger = get_logger(__name__)

MONTH_ABBREVIATIONS = {name[:3].upper(): name for name in MONTH_NAMES}

# "JAN 2024", "feb 2025"
ABBREVIATED_PERIOD = re.compile(
    r'\b(JAN|FEB|MAR|APR|MAY|JUN|JUL|AUG|SEP|OCT|NOV|DEC)\s+(\d{4})\b',
    re.IGNORECASE
)

# "Service Provision Period: 02/2024"
LABELLED_PERIOD = re.compile(
    r'(?:Service|Provision|Period).*?(\d{1,2})[./](\d{4})',
    re.IGNORECASE
)

# Bare "02/2024" or "02.2024"
NUMERIC_PERIOD = re.compile(r'\b(\d{1,2})[./](\d{4})\b')


def _numeric_period(month: str, year: str):
    month_index = int(month)
    if 1 <= month_index <= 12:
        return f"{MONTH_NAMES[month_index - 1]} {year}"
    return None


def resolve_service_period(page_text: str, unknown: str = UNKNOWN_PERIOD) -> str:
    """
    Resolve the service provision period of one page.

    Args:
        page_text: Text of a single page.
        unknown: Sentinel returned when nothing matches.

    Returns:
        "<Month> <Year>" or the unknown sentinel.

    Example:
        >>> resolve_service_period("Billing JAN 2024")
        'January 2024'
        >>> resolve_service_period("Service Provision Period: 02/2024")
        'February 2024'
    """
    text = page_text or ''

    match = ABBREVIATED_PERIOD.search(text)
    if match:
        period = f"{MONTH_ABBREVIATIONS[match.group(1).upper()]} {match.group(2)}"
        logger.debug(f"Service period '{period}' from '{match.group(0)}'")
        return period

    match = LABELLED_PERIOD.search(text)
    if match:
        period = _numeric_period(match.group(1), match.group(2))
        if period:
            logger.debug(f"Service period '{period}' from label '{match.group(0)}'")
            return period

    for match in NUMERIC_PERIOD.finditer(text):
        period = _numeric_period(match.group(1), match.group(2))
        if period:
            logger.debug(f"Service period '{period}' from token '{match.group(0)}'")
            return period

    logger.debug("Could not resolve service period for page")
    return unknown
