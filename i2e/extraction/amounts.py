"""
Amount Parsing Module.

Locale-aware parsing of invoice amount tokens such as "1.234,56",
"1,234.56" or "950,00-". The trailing minus is the sign convention of
the source documents.

Author: I2E Development Team
"""

import re
from typing import Optional

_DIGIT = re.compile(r'\d')
_NUMERIC = re.compile(r'^\d*\.?\d*$')
_AMOUNT_SHAPE = re.compile(r'\d[\d.,]*-?')


def parse_amount(token: Optional[str]) -> Optional[float]:
    """
    Parse an amount token into a signed float.

    When both "." and "," occur, whichever appears last is the decimal
    separator and the other is a grouping separator. A lone "," is a
    decimal separator. Several dots without a comma are grouping
    separators.

    Args:
        token: Raw token, with an optional trailing (or leading) "-".

    Returns:
        Parsed value, or None if the token holds no parsable number.

    Example:
        >>> parse_amount("1.234,56")
        1234.56
        >>> parse_amount("1234,56-")
        -1234.56
        >>> parse_amount("-50,00")
        -50.0
        >>> parse_amount("50")
        50.0
    """
    if not token:
        return None

    cleaned = token.strip()
    negative = cleaned.endswith('-')
    if negative:
        cleaned = cleaned[:-1].rstrip()
    elif cleaned.startswith('-'):
        negative = True
        cleaned = cleaned[1:].lstrip()

    if not _DIGIT.search(cleaned):
        return None

    has_dot = '.' in cleaned
    has_comma = ',' in cleaned

    if has_dot and has_comma:
        if cleaned.rfind(',') > cleaned.rfind('.'):
            cleaned = cleaned.replace('.', '').replace(',', '.')
        else:
            cleaned = cleaned.replace(',', '')
    elif has_comma:
        head, _, tail = cleaned.rpartition(',')
        cleaned = head.replace(',', '') + '.' + tail
    elif cleaned.count('.') > 1:
        cleaned = cleaned.replace('.', '')

    if not _NUMERIC.match(cleaned):
        return None

    try:
        value = float(cleaned)
    except ValueError:
        return None

    return -value if negative else value


def is_amount_token(token: str) -> bool:
    """Check whether a whitespace token looks like a signed amount."""
    return bool(_AMOUNT_SHAPE.fullmatch(token)) and parse_amount(token) is not None
