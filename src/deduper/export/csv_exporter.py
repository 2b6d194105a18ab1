"""
CSV exporter for deduper.

This module exports groups as rows of (group key, raw string, count),
suitable for reviewing merges in a spreadsheet application.
"""

import csv
from pathlib import Path
from typing import Iterable, Union

from deduper.core.models import Group
from deduper.export.base import BaseExporter
from deduper.utils.exceptions import ExportError

FIELDNAMES = ["group", "key", "value", "count", "representative"]


class CSVExporter(BaseExporter):
    """Exporter for group CSV reports.

    One row per distinct raw string. ``group`` numbers groups in creation
    order starting at 1; ``representative`` is true for the first string
    of each group.

    Example:
        >>> exporter = CSVExporter(output_dir="results")
        >>> exporter.export(deduper.groups(), "groups.csv")
        True
    """

    @property
    def file_extension(self) -> str:
        return "csv"

    def write(self, groups: Iterable[Group], output_file: Union[str, Path]) -> Path:
        """Export groups to a CSV file.

        Args:
            groups: Groups to export
            output_file: Name of output file (will add .csv if needed)

        Returns:
            Path to created CSV file

        Raises:
            ExportError: If writing to file fails
        """
        output_file = str(output_file)
        if not output_file.endswith(".csv"):
            output_file = f"{output_file}.csv"

        output_path = self._get_output_path(output_file)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", newline="", encoding="utf-8") as f:
                writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
                writer.writeheader()

                for number, group in enumerate(groups, 1):
                    for position, (value, count) in enumerate(group.occurrences()):
                        writer.writerow(
                            {
                                "group": number,
                                "key": group.key,
                                "value": value,
                                "count": count,
                                "representative": position == 0,
                            }
                        )
        except OSError as e:
            raise ExportError(f"Failed to write CSV file: {e}", format="csv") from e

        return output_path
