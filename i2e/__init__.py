"""
I2E Invoice Processor - Source Package.

This package turns the reading-order page text of machine-readable
invoices into structured records: header metadata, per-page service
periods, a disambiguated invoice total and itemized line items.

Modules:
    - extraction: Heuristic invoice-text extraction engine
    - input_handler: Page-text loading and input contract validation
    - postprocessor: Consumer helpers over extracted records
    - output_handler: JSON and CSV record output
    - utils: Logging, exceptions and file helpers

Architecture:
    Page texts → Header / Periods / Totals / Line items → Assembly → Output
                                                                 ↓
                                                         Post-processing
"""

__version__ = "1.0.0"
__author__ = "I2E Development Team"

__all__ = [
    'extraction',
    'input_handler',
    'postprocessor',
    'output_handler',
    'utils'
]
