"""
Plain text exporter for deduper.

Writes one string per line. Empty strings produced by group separation
become empty lines.
"""

from pathlib import Path
from typing import Iterable, Union

from deduper.export.base import BaseExporter
from deduper.utils.exceptions import ExportError


class TextExporter(BaseExporter):
    """Exporter for newline-delimited UTF-8 text.

    Example:
        >>> exporter = TextExporter(output_dir="results")
        >>> exporter.export(deduper.get_duplicates(include_original=True), "output.txt")
        True
    """

    def __init__(self, output_dir=None, encoding: str = "utf-8"):
        super().__init__(output_dir)
        self.encoding = encoding
        self.lines_written = 0

    @property
    def file_extension(self) -> str:
        return "txt"

    def write(self, lines: Iterable[str], output_file: Union[str, Path]) -> Path:
        """Write each element of ``lines`` followed by a newline.

        ``lines`` is consumed lazily, so a query generator can be passed
        directly.

        Raises:
            ExportError: If the file cannot be written
        """
        output_path = self._get_output_path(output_file)
        self.lines_written = 0

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding=self.encoding, newline="\n") as f:
                for line in lines:
                    f.write(f"{line}\n")
                    self.lines_written += 1
        except OSError as e:
            raise ExportError(
                f"Failed to write text file: {e}", format="text", path=str(output_path)
            ) from e

        return output_path
