"""
Post-Processing Module for the I2E invoice processor.

Consumer-side helpers over extracted records:
    - Invoice summaries
    - Total vs line-item reconciliation
    - Deduplication by invoice number
    - Aggregation by project ID / WBS

Author: I2E Development Team
"""

from .summary import extract_invoice_summary, normalize_invoice_date
from .validators import TotalValidator, ReconciliationResult
from .aggregation import standardize_wbs, deduplicate_invoices, aggregate_by_project

__all__ = [
    'extract_invoice_summary',
    'normalize_invoice_date',
    'TotalValidator',
    'ReconciliationResult',
    'standardize_wbs',
    'deduplicate_invoices',
    'aggregate_by_project'
]
