"""
Main Output Handler Module.

This module provides the OutputHandler class that writes extracted
records to JSON or CSV files. Spreadsheet generation is left to
downstream tooling that consumes these files.

Author: I2E Development Team
"""

import csv
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from config import get_config
from i2e.utils.logger import get_logger
from i2e.utils.helpers import ensure_directory, generate_timestamp
from i2e.utils.exceptions import ExportError

# Initialize module logger
logger = get_logger(__name__)

Record = Dict[str, Any]


class OutputHandler:
    """
    Writer for extraction records.

    The format follows the output file extension (.json or .csv); paths
    without one use the configured default format.

    Attributes:
        output_format: Default format ('json' or 'csv')
        output_dir: Directory for generated file names
        json_indent: Indentation of JSON output

    Example:
        >>> handler = OutputHandler()
        >>> handler.save(records, "outputs/records.json")
        'outputs/records.json'
    """

    SUPPORTED_FORMATS = ('json', 'csv')

    def __init__(
        self,
        output_format: Optional[str] = None,
        output_dir: Optional[str] = None
    ) -> None:
        self.output_format = (output_format or get_config("output.format", "json")).lower()
        if self.output_format not in self.SUPPORTED_FORMATS:
            raise ExportError(
                str(output_dir or ''), f"Unsupported output format: {self.output_format}"
            )

        self.output_dir = Path(output_dir or get_config("output.directory", "outputs"))
        self.json_indent = get_config("output.json_indent", 2)

        logger.info(f"OutputHandler initialized (format={self.output_format})")

    def save(
        self,
        records: List[Record],
        output_path: Optional[Union[str, Path]] = None
    ) -> str:
        """
        Write records to a file.

        Args:
            records: Records of one or more documents.
            output_path: Target file. Defaults to a timestamped file in
                the output directory.

        Returns:
            Path of the written file.

        Raises:
            ExportError: If the file cannot be written.
        """
        path = self._resolve_path(output_path)
        output_format = path.suffix.lstrip('.').lower() or self.output_format
        if output_format not in self.SUPPORTED_FORMATS:
            raise ExportError(str(path), f"Unsupported output format: {output_format}")

        try:
            ensure_directory(path.parent)
            if output_format == 'csv':
                self.to_csv(records, path)
            else:
                self.to_json(records, path)
        except OSError as e:
            raise ExportError(str(path), str(e)) from e

        logger.info(f"Wrote {len(records)} records to {path}")
        return str(path)

    def _resolve_path(self, output_path: Optional[Union[str, Path]]) -> Path:
        if output_path:
            return Path(output_path)
        return self.output_dir / f"i2e_records_{generate_timestamp()}.{self.output_format}"

    def to_json(self, records: List[Record], path: Path) -> None:
        """Write records as a JSON array."""
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.dumps(records))

    def dumps(self, records: List[Record]) -> str:
        """Serialize records deterministically."""
        return json.dumps(records, indent=self.json_indent, ensure_ascii=False)

    def to_csv(self, records: List[Record], path: Path) -> None:
        """
        Write records as CSV.

        Columns are the union of record keys in first-seen order, so
        header-only records and line-item records can share one file.
        """
        fieldnames = []
        for record in records:
            for key in record:
                if key not in fieldnames:
                    fieldnames.append(key)

        with open(path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, restval='')
            writer.writeheader()
            for record in records:
                writer.writerow({k: '' if v is None else v for k, v in record.items()})
