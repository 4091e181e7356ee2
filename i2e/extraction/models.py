"""
Extraction Data Classes.

This module defines the data structures produced by the extraction
engine: the document header, the per-page total candidates and the line
items. Records handed to consumers are plain dicts keyed by the camelCase
names of the output contract.

Author: I2E Development Team
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional


# Cost classification labels
COST_INTERNAL = "Internal"
COST_EXTERNAL = "External"

# Total candidate kinds and their ranking (lower wins)
KIND_TOTAL = "Total"
KIND_SUBTOTAL = "Subtotal"
TOTAL_PRIORITIES = {KIND_TOTAL: 1, KIND_SUBTOTAL: 2}

UNKNOWN_PERIOD = "Unknown Period"


@dataclass(frozen=True)
class InvoiceHeader:
    """
    Document-level invoice metadata.

    Built once per document from the full concatenated text. Every field
    except file_name and credit_note may be None when no pattern matched.

    Example:
        >>> header = InvoiceHeader(file_name="inv.pdf", invoice_number="90001234")
        >>> header.to_dict()["invoiceNumber"]
        '90001234'
    """
    file_name: str
    project_id: Optional[str] = None
    invoice_number: Optional[str] = None
    customer_id: Optional[str] = None
    date_of_invoice: Optional[str] = None
    month_of_invoice: Optional[str] = None
    currency: Optional[str] = None
    vat: Optional[str] = None
    credit_note: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the record key layout of the output contract."""
        return {
            'fileName': self.file_name,
            'projectId': self.project_id,
            'invoiceNumber': self.invoice_number,
            'customerId': self.customer_id,
            'dateOfInvoice': self.date_of_invoice,
            'monthOfInvoice': self.month_of_invoice,
            'currency': self.currency,
            'vat': self.vat,
            'creditNote': self.credit_note,
        }


@dataclass(frozen=True)
class TotalCandidate:
    """
    A Total or Subtotal figure found on one page.

    Attributes:
        amount: Signed parsed amount
        page_number: 1-based page the keyword line sits on
        source_line: Original text the amount came from (diagnostics)
        kind: KIND_TOTAL or KIND_SUBTOTAL
        priority: 1 for Total, 2 for Subtotal
        line_index: Index of the keyword line within its page
    """
    amount: float
    page_number: int
    source_line: str
    kind: str
    priority: int
    line_index: int = 0

    @classmethod
    def create(
        cls,
        amount: float,
        page_number: int,
        source_line: str,
        kind: str,
        line_index: int = 0
    ) -> 'TotalCandidate':
        """Build a candidate, deriving the priority from its kind."""
        return cls(
            amount=amount,
            page_number=page_number,
            source_line=source_line,
            kind=kind,
            priority=TOTAL_PRIORITIES[kind],
            line_index=line_index,
        )


@dataclass(frozen=True)
class LineItem:
    """
    One itemized invoice position.

    extracted_invoice_total stays None until the assembler stamps the
    document-wide resolved total onto every item.
    """
    position: str
    material: str
    position_description: str
    position_quantity: float
    unit: str
    vat: str
    unit_price: Optional[float]
    position_total: Optional[float]
    type_cost: str
    service_provision_period: str = UNKNOWN_PERIOD
    page_number: int = 1
    extracted_invoice_total: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the record key layout of the output contract."""
        return {
            'position': self.position,
            'material': self.material,
            'positionDescription': self.position_description,
            'positionQuantity': self.position_quantity,
            'unit': self.unit,
            'vat': self.vat,
            'unitPrice': self.unit_price,
            'positionTotal': self.position_total,
            'typeCost': self.type_cost,
            'serviceProvisionPeriod': self.service_provision_period,
            'pageNumber': self.page_number,
            'extractedInvoiceTotal': self.extracted_invoice_total,
        }

    def __repr__(self) -> str:
        return (
            f"LineItem(position={self.position}, "
            f"description='{self.position_description}', "
            f"total={self.position_total}, page={self.page_number})"
        )
