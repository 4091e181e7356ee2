"""
Record Aggregation Module.

Consumer-side helpers keyed on the two identifiers of the output
contract: invoiceNumber for deduplication and projectId for cost
aggregation. Both may be None.

Author: I2E Development Team
"""

import re
from typing import Any, Dict, List, Optional

from i2e.utils.logger import get_logger
from .summary import extract_invoice_summary

# Initialize module logger
logger = get_logger(__name__)

# Records of one document
Invoice = List[Dict[str, Any]]

_PROJECT_SUFFIX = re.compile(r'([A-Z]{2,4}\d{7})$')


def standardize_wbs(wbs_code: Optional[str]) -> str:
    """
    Standardize a WBS code for matching.

    Drops a "-EXN" suffix, uppercases and reduces a full WBS element to
    its project ID.

    Example:
        >>> standardize_wbs("en44-pro0022640-EXN")
        'PRO0022640'
    """
    if not wbs_code or not isinstance(wbs_code, str):
        return ''

    standardized = re.sub(r'-EXN$', '', wbs_code.strip(), flags=re.IGNORECASE).upper()

    match = _PROJECT_SUFFIX.search(standardized)
    if match:
        return match.group(1)
    return standardized


def invoice_number_of(invoice: Invoice) -> Optional[str]:
    """Invoice number of a document's records, if any."""
    return invoice[0].get('invoiceNumber') if invoice else None


def deduplicate_invoices(existing: List[Invoice], incoming: List[Invoice]) -> List[Invoice]:
    """
    Merge two lists of documents, keyed by invoice number.

    Incoming documents replace existing ones with the same invoice number
    in place; documents without an invoice number are always kept.

    Returns:
        New list; the inputs are not modified.
    """
    result = list(existing)
    index_by_number = {}
    for i, invoice in enumerate(result):
        number = invoice_number_of(invoice)
        if number:
            index_by_number[number] = i

    replaced = added = 0
    for invoice in incoming:
        number = invoice_number_of(invoice)
        if number and number in index_by_number:
            result[index_by_number[number]] = invoice
            replaced += 1
            continue

        if number:
            index_by_number[number] = len(result)
        result.append(invoice)
        added += 1

    logger.info(f"Deduplication complete: {replaced} updated, {added} new")
    return result


def aggregate_by_project(invoices: List[Invoice]) -> Dict[str, Dict[str, Any]]:
    """
    Total the invoices per standardized project ID.

    Documents without a project ID or without a total are skipped.

    Returns:
        Mapping of project ID to {'projectId', 'totalInvoiced',
        'invoiceCount', 'invoiceNumbers'}.
    """
    projects: Dict[str, Dict[str, Any]] = {}

    for invoice in invoices:
        summary = extract_invoice_summary(invoice)
        project_id = standardize_wbs(summary.get('projectId'))
        total = summary.get('totalAmount')
        if not project_id or not total:
            continue

        group = projects.setdefault(project_id, {
            'projectId': project_id,
            'totalInvoiced': 0.0,
            'invoiceCount': 0,
            'invoiceNumbers': [],
        })
        group['totalInvoiced'] = round(group['totalInvoiced'] + total, 2)
        group['invoiceCount'] += 1
        group['invoiceNumbers'].append(summary.get('invoiceNumber'))

    logger.info(f"Calculated totals for {len(projects)} projects")
    return projects
