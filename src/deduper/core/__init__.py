"""
Core functionality for deduper.

This package contains the configuration and data models shared by the
deduplication engine, line sources and exporters.
"""

from .config import (
    AppConfig,
    DeduperConfig,
    ExportMode,
    FuzzyMatchingConfig,
    FuzzyMatchingStrategy,
    OutputConfig,
    SourceConfig,
    load_config,
    load_config_from_dict,
    merge_configs,
)
from .models import DedupStatistics, Group

__all__ = [
    # Configuration
    "AppConfig",
    "DeduperConfig",
    "FuzzyMatchingConfig",
    "SourceConfig",
    "OutputConfig",
    "FuzzyMatchingStrategy",
    "ExportMode",
    # Config utilities
    "load_config",
    "load_config_from_dict",
    "merge_configs",
    # Models
    "Group",
    "DedupStatistics",
]
