"""
Keyword Classifiers.

Cost type classification of line-item descriptions and document-level
credit note detection.
"""

from typing import Optional

from .models import COST_INTERNAL, COST_EXTERNAL

# Checked in order, first match wins
COST_TYPE_RULES = (
    (('application', 'infrastructure'), COST_INTERNAL),
    (('external', 'other'), COST_EXTERNAL),
    (('consultant', 'service', 'support'), COST_EXTERNAL),
)

CREDIT_NOTE_INDICATORS = (
    'credit note',
    'creditnote',
    'credit memo',
    'refund',
    'return',
    'adjustment',
    'reversal',
)


def classify_cost_type(description: Optional[str]) -> str:
    """
    Classify a line-item description as Internal or External cost.

    Example:
        >>> classify_cost_type("Application Hosting")
        'Internal'
        >>> classify_cost_type("External consultant")
        'External'
    """
    desc_lower = (description or '').lower()

    for keywords, cost_type in COST_TYPE_RULES:
        if any(keyword in desc_lower for keyword in keywords):
            return cost_type

    return COST_INTERNAL


def detect_credit_note(text: Optional[str]) -> bool:
    """Check the whole document text for credit note indicators."""
    text_lower = (text or '').lower()
    return any(indicator in text_lower for indicator in CREDIT_NOTE_INDICATORS)
