"""
Invoice Total Resolution Module.

Collects Total / Subtotal candidates page by page and resolves the single
authoritative invoice total across all pages.

Selection rules:
    - A "Total" always outranks a "Subtotal", whatever the magnitudes.
    - Between candidates of equal rank the later page wins.
    - Within one page, the earlier line wins.
    - Without any candidate, coarse whole-document patterns are tried.

Author: I2E Development Team
"""

import re
from functools import cmp_to_key
from typing import Iterable, List, Optional, Tuple

from i2e.utils.logger import get_logger
from .amounts import parse_amount
from .models import KIND_SUBTOTAL, KIND_TOTAL, TotalCandidate
from .patterns import (
    AMOUNT_TOKEN,
    MAIN_TOTAL_WORD,
    POSITION_TOTAL_HEADER,
    SUBTOTAL_WORD,
    TOTAL_KEYWORD,
    is_total_boundary,
    is_vat_line,
)

# Initialize module logger
logger = get_logger(__name__)

DEFAULT_AMOUNT_WINDOW = 50
DEFAULT_LOOKAHEAD_LINES = 2
DEFAULT_MIN_AMOUNT = 1.0

_FALLBACK_AMOUNT = '(' + AMOUNT_TOKEN.pattern + ')'

# Whole-document fallbacks, tried in order. Keyword and amount share a line.
FALLBACK_TOTAL_PATTERNS = (
    re.compile(r'Total[ \t]*:?[ \t]*' + _FALLBACK_AMOUNT, re.IGNORECASE),
    re.compile(r'Subtotal[ \t]*\(Net\)[ \t]*' + _FALLBACK_AMOUNT, re.IGNORECASE),
    re.compile(r'Grand[ \t]+Total[ \t]*' + _FALLBACK_AMOUNT, re.IGNORECASE),
)


def _largest_amount(
    matches: Iterable[str],
    min_amount: float
) -> Optional[float]:
    """Largest absolute parsed amount strictly above min_amount."""
    best = None
    for token in matches:
        amount = parse_amount(token)
        if amount is None or abs(amount) <= min_amount:
            continue
        if best is None or abs(amount) > abs(best):
            best = amount
    return best


def _same_line_amount(line: str, amount_window: int, min_amount: float) -> Optional[float]:
    keyword = TOTAL_KEYWORD.search(line)
    if not keyword:
        return None

    keyword_end = keyword.end()
    in_window = (
        match.group(0)
        for match in AMOUNT_TOKEN.finditer(line)
        if match.start() >= keyword_end and match.start() - keyword_end < amount_window
    )
    return _largest_amount(in_window, min_amount)


def _next_lines_amount(
    lines: List[str],
    index: int,
    lookahead_lines: int,
    min_amount: float
) -> Tuple[Optional[float], Optional[str]]:
    for check_line in lines[index + 1:index + 1 + lookahead_lines]:
        if is_vat_line(check_line):
            logger.debug(f"Skipping VAT line in next-line search: '{check_line.strip()}'")
            continue

        amount = _largest_amount(
            (match.group(0) for match in AMOUNT_TOKEN.finditer(check_line)),
            min_amount
        )
        if amount is not None:
            return amount, check_line.strip()
    return None, None


def total_kind(line: str) -> str:
    """Classify a keyword line as a main Total or a Subtotal."""
    if MAIN_TOTAL_WORD.search(line) and not SUBTOTAL_WORD.search(line):
        return KIND_TOTAL
    return KIND_SUBTOTAL


def collect_total_candidates(
    page_text: str,
    page_number: int,
    amount_window: int = DEFAULT_AMOUNT_WINDOW,
    lookahead_lines: int = DEFAULT_LOOKAHEAD_LINES,
    min_amount: float = DEFAULT_MIN_AMOUNT
) -> List[TotalCandidate]:
    """
    Scan one page for Total / Subtotal candidates.

    Args:
        page_text: Text of a single page.
        page_number: 1-based page number.
        amount_window: Characters after the keyword searched for an amount.
        lookahead_lines: Following lines searched when the keyword line
            carries no amount.
        min_amount: Absolute values at or below this are ignored.

    Returns:
        Candidates in line order.
    """
    lines = (page_text or '').split('\n')
    candidates = []

    for index, line in enumerate(lines):
        if not is_total_boundary(line):
            continue
        if is_vat_line(line):
            logger.debug(f"Skipping VAT line: '{line.strip()}'")
            continue

        kind = total_kind(line)
        source_line = line.strip()

        amount = _same_line_amount(line, amount_window, min_amount)
        if amount is None:
            amount, next_line = _next_lines_amount(lines, index, lookahead_lines, min_amount)
            if amount is not None:
                source_line = f"{source_line} -> {next_line}"

        if amount is None:
            logger.debug(f"No amount for {kind} line: '{line.strip()}'")
            continue

        candidate = TotalCandidate.create(
            amount=amount,
            page_number=page_number,
            source_line=source_line,
            kind=kind,
            line_index=index,
        )
        candidates.append(candidate)
        logger.debug(f"Page {page_number}: potential {kind} {amount} from '{source_line}'")

    return candidates


def compare_total_candidates(a: TotalCandidate, b: TotalCandidate) -> int:
    """
    Order total candidates from most to least authoritative.

    Lower priority first (Total before Subtotal), then the later page,
    then the earlier line on the same page.
    """
    if a.priority != b.priority:
        return a.priority - b.priority
    if a.page_number != b.page_number:
        return b.page_number - a.page_number
    return a.line_index - b.line_index


def rank_total_candidates(candidates: Iterable[TotalCandidate]) -> List[TotalCandidate]:
    """Sort candidates with compare_total_candidates."""
    return sorted(candidates, key=cmp_to_key(compare_total_candidates))


def _line_at(text: str, index: int) -> str:
    start = text.rfind('\n', 0, index) + 1
    end = text.find('\n', index)
    return text[start:] if end < 0 else text[start:end]


def fallback_total(full_text: str) -> Optional[float]:
    """
    Coarse whole-document total search used when no candidate was found.

    For the first pattern with any nonzero match, the last such match in
    document order wins. Matches on a "Position ... Total" column header
    line are ignored.
    """
    text = full_text or ''
    for pattern in FALLBACK_TOTAL_PATTERNS:
        amounts = [
            parse_amount(match.group(1)) for match in pattern.finditer(text)
            if not POSITION_TOTAL_HEADER.search(_line_at(text, match.start()))
        ]
        nonzero = [amount for amount in amounts if amount]
        if nonzero:
            logger.debug(f"Fallback total {nonzero[-1]} from pattern {pattern.pattern}")
            return nonzero[-1]
    return None


def resolve_invoice_total(
    candidates: Iterable[TotalCandidate],
    full_text: str = ''
) -> Optional[float]:
    """
    Resolve the authoritative invoice total across all pages.

    Args:
        candidates: Pooled candidates from every page.
        full_text: Whole document text for the fallback patterns.

    Returns:
        Resolved total, or None if nothing qualifies.
    """
    ranked = rank_total_candidates(candidates)
    if ranked:
        best = ranked[0]
        logger.debug(
            f"Selected total {best.amount} ({best.kind}) from page "
            f"{best.page_number} out of {len(ranked)} candidates"
        )
        return best.amount

    return fallback_total(full_text)
