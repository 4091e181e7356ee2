"""
Shared Regular Expressions.

Compiled patterns used by more than one extractor. Compiled pattern
objects are immutable; every call site works with fresh match objects.
"""

import re

# Percentage-plus-code token marking a line-item row, e.g. "21%(V1)"
VAT_ANCHOR = re.compile(r'\d+[.,]?\d*%\([A-Z0-9]+\)')

# "VAT 21%" summary rows, which carry VAT amounts rather than totals
VAT_RATE_LINE = re.compile(r'VAT\s+[0-9.,]+%', re.IGNORECASE)

# Total / Subtotal as whole words
TOTAL_WORD = re.compile(r'\b(?:Subtotal|Total)\b', re.IGNORECASE)

# Keyword used to locate the amount window, including "Subtotal (Net)"
TOTAL_KEYWORD = re.compile(r'\b(?:Subtotal(?:\s*\(Net\))?|Total\b)', re.IGNORECASE)

MAIN_TOTAL_WORD = re.compile(r'\bTotal\b', re.IGNORECASE)
SUBTOTAL_WORD = re.compile(r'Subtotal', re.IGNORECASE)

# Column header, not a value
POSITION_TOTAL_HEADER = re.compile(r'Position.*Total', re.IGNORECASE)

# Money amount with exactly two decimals and optional trailing minus,
# e.g. "1.234,56", "1,234.56", "950,00-"
AMOUNT_TOKEN = re.compile(r'(?<![\d.,])\d+(?:[.,]\d{3})*[.,]\d{2}(?![.,]?\d)-?')


def is_vat_line(line: str) -> bool:
    """Check whether a line carries a VAT percentage rather than a total."""
    return bool(VAT_ANCHOR.search(line) or VAT_RATE_LINE.search(line))


def is_total_boundary(line: str) -> bool:
    """Check whether a line is a Total/Subtotal line (not a column header)."""
    return bool(TOTAL_WORD.search(line)) and not POSITION_TOTAL_HEADER.search(line)
