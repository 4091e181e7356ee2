"""
Total Reconciliation Module.

Compares the extracted invoice total with the sum of the line-item
totals. This check belongs to the consumers of the records; the
extraction engine never performs it.

Author: I2E Development Team
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from config import get_config
from i2e.utils.logger import get_logger
from .summary import line_item_sum

# Initialize module logger
logger = get_logger(__name__)


@dataclass
class ReconciliationResult:
    """
    Outcome of a total-vs-lines comparison.

    Attributes:
        invoice_number: Invoice the records belong to
        extracted_total: extractedInvoiceTotal of the records
        line_item_total: Sum of positionTotal values
        difference: extracted_total - line_item_total
        is_consistent: Whether the difference is within tolerance
        warnings: Human-readable findings
    """
    invoice_number: Optional[str] = None
    extracted_total: Optional[float] = None
    line_item_total: float = 0.0
    difference: Optional[float] = None
    is_consistent: bool = False
    warnings: List[str] = field(default_factory=list)

    def add_warning(self, warning: str) -> None:
        """Add a warning message."""
        self.warnings.append(warning)


class TotalValidator:
    """
    Reconciles extracted totals against line items.

    Invoices commonly print the gross total while line items are net, so
    a VAT-sized gap is reported as a warning rather than treated as an
    error.

    Example:
        >>> validator = TotalValidator(tolerance=0.01)
        >>> result = validator.reconcile(records)
        >>> result.is_consistent
        True
    """

    def __init__(self, tolerance: Optional[float] = None) -> None:
        self.tolerance = tolerance if tolerance is not None else \
            get_config("postprocessing.total_tolerance", 0.01)

    def reconcile(self, records: List[Dict[str, Any]]) -> ReconciliationResult:
        """
        Compare the extracted total with the line-item sum.

        Args:
            records: Output records of a single document.

        Returns:
            ReconciliationResult with the comparison outcome.
        """
        result = ReconciliationResult()
        if not records:
            result.add_warning("No records to reconcile")
            return result

        first = records[0]
        result.invoice_number = first.get('invoiceNumber')
        result.extracted_total = first.get('extractedInvoiceTotal')
        result.line_item_total = line_item_sum(records)

        if len({r.get('extractedInvoiceTotal') for r in records}) > 1:
            result.add_warning("Records disagree on extractedInvoiceTotal")

        if result.extracted_total is None:
            result.add_warning("No invoice total extracted")
            return result

        if not any('position' in r for r in records):
            result.add_warning("No line items extracted")
            return result

        result.difference = round(result.extracted_total - result.line_item_total, 2)
        result.is_consistent = abs(result.difference) <= self.tolerance

        if not result.is_consistent:
            result.add_warning(
                f"Invoice total {result.extracted_total} differs from line items "
                f"{result.line_item_total} by {result.difference}"
            )
            logger.debug(f"Invoice {result.invoice_number}: {result.warnings[-1]}")

        return result
