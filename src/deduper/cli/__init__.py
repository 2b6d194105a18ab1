"""
deduper CLI module.

This module provides the command-line interface for deduper.
"""

from deduper.cli.main import cli, main

__all__ = ["cli", "main"]
