"""
Extraction Module for the I2E invoice processor.

This module turns reading-order page text into invoice records:
    - Amount parsing
    - Header field extraction
    - Per-page service period resolution
    - Cross-page invoice total resolution
    - Cascading line item parsing
    - Cost type and credit note classification
    - Record assembly

Author: I2E Development Team
"""

from .amounts import parse_amount
from .assembler import assemble_records
from .classifiers import classify_cost_type, detect_credit_note
from .extractor import InvoiceTextExtractor, DocumentExtraction, extract_invoice_data
from .header import extract_field, extract_header, month_of_invoice
from .line_items import extract_line_items, parse_structured, parse_tokenized, parse_loose
from .models import InvoiceHeader, LineItem, TotalCandidate
from .service_period import resolve_service_period
from .totals import (
    collect_total_candidates,
    compare_total_candidates,
    resolve_invoice_total,
)

__all__ = [
    'InvoiceTextExtractor',
    'DocumentExtraction',
    'extract_invoice_data',
    'parse_amount',
    'assemble_records',
    'classify_cost_type',
    'detect_credit_note',
    'extract_field',
    'extract_header',
    'month_of_invoice',
    'extract_line_items',
    'parse_structured',
    'parse_tokenized',
    'parse_loose',
    'InvoiceHeader',
    'LineItem',
    'TotalCandidate',
    'resolve_service_period',
    'collect_total_candidates',
    'compare_total_candidates',
    'resolve_invoice_total',
]
