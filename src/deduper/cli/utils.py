"""
Shared CLI utilities.

This module provides configuration loading and logging setup for the
command line interface.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import click
import yaml
from pydantic import ValidationError

from deduper.cli.formatting import print_error
from deduper.core.config import AppConfig, load_config_from_dict
from deduper.utils.logging import configure_library_logging
from deduper.utils.logging import setup_logging as configure_logging


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load configuration from file or use defaults.

    Args:
        config_path: Path to config file (YAML). If None, looks for deduper.yml

    Returns:
        Loaded and validated AppConfig

    Raises:
        click.ClickException: If config is invalid
    """
    if config_path is None:
        config_path = Path("deduper.yml")
        if not config_path.exists():
            return AppConfig()

    if not config_path.exists():
        raise click.ClickException(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}

        return load_config_from_dict(config_data)
    except ValidationError as e:
        print_error(f"Invalid configuration: {e}")
        raise click.ClickException("Configuration validation failed")
    except (OSError, yaml.YAMLError, ValueError) as e:
        raise click.ClickException(f"Error loading config: {e}")


def build_fuzzy_override(
    fuzzy: Optional[bool],
    strategy: Optional[str],
    min_length: Optional[int],
    max_deviation: Optional[int],
) -> Optional[Dict[str, Any]]:
    """Translate fuzzy matching options into a config override.

    Returns None when no fuzzy option was given, ``{"fuzzy": None}`` for
    ``--no-fuzzy``, otherwise the fuzzy settings to merge. Giving a strategy
    or a threshold implies ``--fuzzy``.
    """
    if fuzzy is False:
        return {"fuzzy": None}

    settings: Dict[str, Any] = {}
    if strategy:
        settings["strategy"] = strategy
    if min_length is not None:
        settings["min_string_length"] = min_length
    if max_deviation is not None:
        settings["max_deviation"] = max_deviation

    if fuzzy is None and not settings:
        return None
    return {"fuzzy": settings}


def setup_logging(verbose: int = 0, quiet: bool = False, log_file: Optional[Path] = None) -> None:
    """Map -v/-q to a log level and install the handlers.

    0 is WARNING, -v is INFO, -vv is DEBUG and also lets the HTTP libraries
    log at INFO. -q wins over -v.
    """
    if quiet:
        level = "ERROR"
    elif verbose == 0:
        level = "WARNING"
    elif verbose == 1:
        level = "INFO"
    else:
        level = "DEBUG"

    configure_logging(level=level, log_file=log_file)
    configure_library_logging(quiet=verbose < 2)
