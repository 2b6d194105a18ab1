"""
Export module for deduper.

This module provides exporters for writing query results to files.

Main classes:
    - TextExporter: Newline-delimited strings
    - CSVExporter: Group report with counts
    - BaseExporter: Base class for custom exporters

Example:
    >>> from deduper.export import TextExporter
    >>>
    >>> exporter = TextExporter()
    >>> ok = exporter.export(deduper.get_duplicates(), "output.txt")
"""

from deduper.export.base import BaseExporter
from deduper.export.csv_exporter import CSVExporter
from deduper.export.text_exporter import TextExporter

__all__ = [
    "BaseExporter",
    "TextExporter",
    "CSVExporter",
]
