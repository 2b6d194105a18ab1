"""
Base exporter classes for deduper.

Exporters write query results to files. ``write`` raises ``ExportError``;
``export`` wraps it and reports success as a boolean so callers at the
I/O boundary check a status instead of handling exceptions.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Union

from deduper.utils.exceptions import ExportError

logger = logging.getLogger(__name__)


class BaseExporter(ABC):
    """Base class for all exporters."""

    def __init__(self, output_dir: Optional[Path] = None):
        """Initialize the exporter.

        Args:
            output_dir: Directory relative output files are written to.
                If None, uses the current directory.
        """
        self.output_dir = Path(output_dir) if output_dir else Path("")

    @abstractmethod
    def write(self, data: Any, output_file: Union[str, Path]) -> Path:
        """Write data to a file.

        Args:
            data: Items to export
            output_file: File name or path

        Returns:
            Path to the created file

        Raises:
            ExportError: If writing fails
        """
        pass

    def export(self, data: Any, output_file: Union[str, Path]) -> bool:
        """Write data to a file, returning True on success and False on failure."""
        try:
            path = self.write(data, output_file)
        except ExportError as e:
            logger.error(f"Export failed: {e}")
            return False
        logger.info(f"Exported {self.file_extension} output to {path}")
        return True

    def _get_output_path(self, output_file: Union[str, Path]) -> Path:
        """Resolve an output file name against the output directory."""
        path = Path(output_file)
        if path.is_absolute():
            return path
        return self.output_dir / path

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Get the file extension for this exporter (e.g., 'txt', 'csv')."""
        pass
