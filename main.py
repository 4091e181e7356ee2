#!/usr/bin/env python3
"""
I2E Invoice Processor - Main Entry Point.

Command-line interface and programmatic access to the invoice-text
extraction pipeline. Input files hold the already laid-out page text of
machine-readable invoices (.json or form-feed separated .txt).

Usage:
    Command Line:
        python main.py --input invoice.json --output records.json
        python main.py --input ./page_texts/ --format csv --summary

    Python:
        from main import run_extraction
        records, failures = run_extraction("page_texts/", save_output=False)

Author: I2E Development Team
Version: 1.0.0
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, List, Dict, Any, Tuple

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import ConfigurationManager  # noqa: E402
from i2e.utils.exceptions import InvoiceExtractionError  # noqa: E402
from i2e.utils.logger import setup_logger_from_config, get_logger, enable_trace  # noqa: E402

Record = Dict[str, Any]


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="I2E Invoice Processor - invoice text extraction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Extract one document:
        python main.py --input invoice.json --output records.json

    Extract a directory to CSV and log per-invoice summaries:
        python main.py --input ./page_texts/ --output records.csv --summary
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Page-text file (.json/.txt) or a directory of them"
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output .json or .csv file (default: timestamped file in outputs/)"
    )
    parser.add_argument(
        "--format", "-f",
        choices=("json", "csv"),
        default=None,
        help="Format of the default output file (default: output.format setting)"
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )
    parser.add_argument(
        "--summary", "-s",
        action="store_true",
        help="Log a summary and a total reconciliation per invoice"
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging, including extraction traces"
    )
    verbosity.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Load the settings and set up logging for a CLI run.

    Args:
        args: Parsed command-line arguments.

    Returns:
        The loaded configuration manager.
    """
    config = ConfigurationManager(args.config)
    logger = setup_logger_from_config()

    if args.debug:
        logger.setLevel(logging.DEBUG)
        enable_trace(True)
    elif args.quiet:
        logger.setLevel(logging.WARNING)

    logger.info("=" * 60)
    logger.info(f"I2E INVOICE PROCESSOR v{config.get('project.version', '1.0.0')}")
    logger.info("=" * 60)
    logger.info(f"Input: {args.input}")
    logger.info(f"Output: {args.output or config.get('output.directory', 'outputs')}")

    return config


def extract_documents(
    input_path: str,
    config_path: Optional[str] = None
) -> Tuple[List[Tuple[str, List[Record]]], List[Dict[str, str]]]:
    """
    Extract every page-text file of a file or directory path.

    A document that fails is logged with its source file name and
    recorded as a failure; the remaining documents are still processed.

    Args:
        input_path: Page-text file or directory.
        config_path: Optional custom configuration file path.

    Returns:
        Tuple of (documents as (source file name, records) in file order,
        failures as {'file': name, 'error': message}).
    """
    logger = get_logger(__name__)

    ConfigurationManager(config_path)

    from i2e.input_handler import InputHandler
    from i2e.extraction import InvoiceTextExtractor

    input_handler = InputHandler()
    extractor = InvoiceTextExtractor()

    paths = input_handler.collect_files(input_path)
    logger.info(f"Extracting {len(paths)} documents")

    documents: List[Tuple[str, List[Record]]] = []
    failures: List[Dict[str, str]] = []

    for path in paths:
        try:
            document = input_handler.load(path)
            records = extractor.extract(document.page_texts, document.file_name)
        except InvoiceExtractionError as e:
            logger.error(f"{path.name}: {e}")
            failures.append({'file': path.name, 'error': str(e)})
            continue

        first = records[0]
        logger.info(
            f"{path.name}: invoice {first.get('invoiceNumber') or 'N/A'}, "
            f"{document.page_count} pages, {len(records)} records, "
            f"total {first.get('extractedInvoiceTotal')}"
        )
        documents.append((path.name, records))

    return documents, failures


def run_extraction(
    input_path: str,
    output_path: Optional[str] = None,
    config_path: Optional[str] = None,
    save_output: bool = True,
    output_format: Optional[str] = None,
    summarize: bool = False
) -> Tuple[List[Record], List[Dict[str, str]]]:
    """
    Extract a file or directory and write the records of all documents.

    Args:
        input_path: Page-text file or directory.
        output_path: Target .json or .csv file.
        config_path: Optional custom configuration file path.
        save_output: Whether to write the records to disk.
        output_format: Format of the default output file.
        summarize: Log a summary and a total reconciliation per document.

    Returns:
        Tuple of (records of all documents in file order, failures as
        {'file': name, 'error': message}).

    Example:
        >>> records, failures = run_extraction("page_texts/", save_output=False)
        >>> for r in records:
        ...     print(r['invoiceNumber'], r['extractedInvoiceTotal'])
    """
    from i2e.output_handler import OutputHandler

    logger = get_logger(__name__)

    documents, failures = extract_documents(input_path, config_path)
    all_records = [record for _, records in documents for record in records]

    if save_output and all_records:
        written = OutputHandler(output_format=output_format).save(all_records, output_path)
        logger.info(f"Records written to {written}")

    if summarize:
        log_summaries(documents)

    return all_records, failures


def log_summaries(documents: List[Tuple[str, List[Record]]]) -> int:
    """
    Log one summary line per document and any reconciliation warnings.

    Args:
        documents: (source file name, records) pairs, one per input file.

    Returns:
        Number of documents whose total does not match their line items.
    """
    from i2e.postprocessor import TotalValidator, extract_invoice_summary

    logger = get_logger(__name__)
    validator = TotalValidator()
    inconsistent = 0

    for source, records in documents:
        summary = extract_invoice_summary(records)
        logger.info(
            f"{source}: #{summary['invoiceNumber'] or 'N/A'} "
            f"project={summary['projectId'] or 'N/A'} "
            f"date={summary['invoiceDateIso'] or summary['invoiceDate'] or 'N/A'} "
            f"total={summary['totalAmount']} {summary['currency'] or ''} "
            f"items={summary['lineItemCount']}"
            f"{' (credit note)' if summary['creditNote'] else ''}"
        )

        result = validator.reconcile(records)
        for warning in result.warnings:
            logger.warning(f"{source}: {warning}")
        if not result.is_consistent:
            inconsistent += 1

    return inconsistent


def main(argv: Optional[List[str]] = None) -> int:
    """
    Command-line entry point.

    Returns:
        0 when every document was extracted, 1 on any failure or when
        there was nothing to extract, 130 when interrupted.
    """
    try:
        args = parse_arguments(argv)
        initialize_system(args)
        logger = get_logger(__name__)

        records, failures = run_extraction(
            input_path=args.input,
            output_path=args.output,
            config_path=args.config,
            output_format=args.format,
            summarize=args.summary
        )

        if not records and not failures:
            logger.error("No files to process")
            return 1

        logger.info("=" * 60)
        logger.info(f"Done: {len(records)} records, {len(failures)} failed documents")
        logger.info("=" * 60)

        return 1 if failures else 0

    except InvoiceExtractionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
