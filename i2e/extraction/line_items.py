"""
Line Item Parsing Module.

Extracts itemized positions from the part of a page that precedes the
first Total / Subtotal line. Rows are recognised by their VAT anchor
token (e.g. "21%(V1)") and parsed by three strategies of decreasing
strictness:

    A. structured - one end-to-end regex for the exact column layout
    B. tokenized  - whitespace tokens located around the VAT anchor
    C. loose      - position, VAT anchor and trailing amount only

Each strategy is a pure function from candidate lines to line items.
A strategy only runs when every earlier one produced nothing for the
whole page.

Author: I2E Development Team
"""

import re
from dataclasses import replace
from typing import Callable, List, Optional, Sequence

from i2e.utils.logger import get_logger
from .amounts import is_amount_token, parse_amount
from .classifiers import classify_cost_type
from .models import LineItem, UNKNOWN_PERIOD
from .patterns import VAT_ANCHOR, is_total_boundary

# Initialize module logger
logger = get_logger(__name__)

DEFAULT_MIN_LINE_LENGTH = 20
DEFAULT_UNIT = 'PU'

# position material description quantity UNIT vat unit-price total
STRUCTURED_ROW = re.compile(
    r'^(\d{4})\s+(\d{6})\s+(.+?)\s+(\d+[.,]?\d*)\s+([A-Z]+)\s+'
    r'(\d+[.,]?\d*%\([A-Z0-9]+\))\s+([\d.,]+)\s+([\d.,]+-?)$'
)

LOOSE_ROW = re.compile(
    r'(?<!\d)(\d{4})\s+.*?(\d+[.,]?\d*%\([A-Z0-9]+\)).*?([\d.,]+-?)$'
)

_POSITION_TOKEN = re.compile(r'\d{4}')
_QUANTITY_TOKEN = re.compile(r'\d+[.,]?\d*')
_UNIT_TOKEN = re.compile(r'[A-Za-z]{1,5}')
_PRICE_TOKEN = re.compile(r'\d+(?:[.,]\d{3})*[.,]\d{2}-?')
_MATERIAL_AFTER_POSITION = re.compile(r'\d{4}\s+(\d{6})\b')
_LOOSE_PREFIX = re.compile(r'^\s*\d{4}\s+(\d{6}\s+)?')
_NUMERIC_SUFFIX = re.compile(r'\s+\d+[.,]?\d*.*$')

Strategy = Callable[[Sequence[str]], List[LineItem]]


def _quantity(token: str) -> float:
    return float(token.replace(',', '.'))


def line_item_section(page_text: str) -> List[str]:
    """Lines of a page before its first Total / Subtotal boundary."""
    section = []
    for line in (page_text or '').split('\n'):
        if is_total_boundary(line):
            logger.debug(f"Stopping at boundary: '{line.strip()}'")
            break
        section.append(line)
    return section


def find_candidate_lines(
    page_text: str,
    min_line_length: int = DEFAULT_MIN_LINE_LENGTH
) -> List[str]:
    """
    Candidate rows: long enough and carrying a VAT anchor.

    Returns stripped lines in page order.
    """
    candidates = []
    for line in line_item_section(page_text):
        stripped = line.strip()
        if len(stripped) > min_line_length and VAT_ANCHOR.search(stripped):
            candidates.append(stripped)
    return candidates


def parse_structured(lines: Sequence[str]) -> List[LineItem]:
    """Strategy A: exact column layout, anchored end to end."""
    items = []
    for line in lines:
        match = STRUCTURED_ROW.match(line.strip())
        if not match:
            continue

        position, material, description, quantity, unit, vat, unit_price, total = match.groups()
        position_total = parse_amount(total)
        if position_total is None:
            continue

        description = description.strip()
        items.append(LineItem(
            position=position,
            material=material,
            position_description=description,
            position_quantity=_quantity(quantity),
            unit=unit,
            vat=vat,
            unit_price=parse_amount(unit_price),
            position_total=position_total,
            type_cost=classify_cost_type(description),
        ))
        logger.debug(f"Structured row: {position} {description} = {position_total}")
    return items


def _parse_tokens(line: str) -> Optional[LineItem]:
    parts = line.split()

    pos_index = next((i for i, p in enumerate(parts) if _POSITION_TOKEN.fullmatch(p)), -1)
    vat_index = next((i for i, p in enumerate(parts) if VAT_ANCHOR.search(p)), -1)
    if pos_index < 0 or vat_index <= pos_index:
        return None

    amount_index = next(
        (i for i in range(vat_index + 1, len(parts)) if is_amount_token(parts[i])),
        -1
    )
    if amount_index < 0:
        return None

    material = parts[pos_index + 1] if pos_index + 1 < vat_index else ''
    middle = parts[pos_index + 2:vat_index]

    unit_price = 0.0
    if middle and _PRICE_TOKEN.fullmatch(middle[-1]):
        unit_price = parse_amount(middle[-1])
        middle = middle[:-1]

    quantity = 1.0
    unit = DEFAULT_UNIT
    description_tokens = middle
    for i, token in enumerate(middle):
        if _QUANTITY_TOKEN.fullmatch(token):
            quantity = _quantity(token)
            description_tokens = middle[:i]
            if i + 1 < len(middle) and _UNIT_TOKEN.fullmatch(middle[i + 1]):
                unit = middle[i + 1]
            break

    description = ' '.join(description_tokens) or 'Unknown Service'
    return LineItem(
        position=parts[pos_index],
        material=material,
        position_description=description,
        position_quantity=quantity,
        unit=unit,
        vat=parts[vat_index],
        unit_price=unit_price,
        position_total=parse_amount(parts[amount_index]),
        type_cost=classify_cost_type(description),
    )


def parse_tokenized(lines: Sequence[str]) -> List[LineItem]:
    """Strategy B: locate position, VAT anchor and amount by token."""
    items = []
    for line in lines:
        item = _parse_tokens(line)
        if item is not None:
            items.append(item)
            logger.debug(
                f"Tokenized row: {item.position} {item.position_description} "
                f"= {item.position_total}"
            )
    return items


def parse_loose(lines: Sequence[str]) -> List[LineItem]:
    """Strategy C: position, VAT anchor and trailing amount only."""
    items = []
    for line in lines:
        match = LOOSE_ROW.search(line)
        if not match:
            continue

        total = parse_amount(match.group(3))
        if total is None:
            continue

        material_match = _MATERIAL_AFTER_POSITION.search(line)
        description = _LOOSE_PREFIX.sub('', line, count=1)
        description = _NUMERIC_SUFFIX.sub('', description).strip() or 'Service Item'

        items.append(LineItem(
            position=match.group(1),
            material=material_match.group(1) if material_match else '',
            position_description=description,
            position_quantity=1.0,
            unit=DEFAULT_UNIT,
            vat=match.group(2),
            unit_price=total,
            position_total=total,
            type_cost=classify_cost_type(description),
        ))
        logger.debug(f"Loose row: {match.group(1)} {description} = {total}")
    return items


LINE_ITEM_STRATEGIES = (parse_structured, parse_tokenized, parse_loose)


def run_strategies(
    lines: Sequence[str],
    strategies: Sequence[Strategy] = LINE_ITEM_STRATEGIES
) -> List[LineItem]:
    """Return the result of the first strategy that yields any item."""
    for strategy in strategies:
        items = strategy(lines)
        if items:
            logger.debug(f"{strategy.__name__} extracted {len(items)} line items")
            return items
        logger.debug(f"{strategy.__name__} found no line items")
    return []


def extract_line_items(
    page_text: str,
    page_number: int,
    service_period: str = UNKNOWN_PERIOD,
    min_line_length: int = DEFAULT_MIN_LINE_LENGTH,
    strategies: Sequence[Strategy] = LINE_ITEM_STRATEGIES
) -> List[LineItem]:
    """
    Extract the line items of one page.

    Args:
        page_text: Text of a single page.
        page_number: 1-based page number stamped on every item.
        service_period: Period stamped on every item.
        min_line_length: Candidate rows must be longer than this.
        strategies: Ordered strategy cascade.

    Returns:
        Line items in row order, possibly empty.
    """
    candidates = find_candidate_lines(page_text, min_line_length)
    logger.debug(f"Page {page_number}: {len(candidates)} candidate lines with VAT anchors")

    items = run_strategies(candidates, strategies)
    return [
        replace(item, service_provision_period=service_period, page_number=page_number)
        for item in items
    ]
