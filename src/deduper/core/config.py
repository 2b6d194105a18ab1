"""
Configuration management for deduper.

This module provides configuration models and utilities for loading
and validating configuration from YAML files, environment variables,
and programmatic sources.

Deduplication settings are immutable once constructed: build a
``DeduperConfig`` up front and hand it to the engine.
"""

import os
import re
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from deduper.normalization import COMPANY_SUFFIXES, available_normalizers, get_normalizer


class FuzzyMatchingStrategy(str, Enum):
    """Fuzzy matching strategy options."""

    LEVENSHTEIN = "levenshtein"
    BITAP = "bitap"


class ExportMode(str, Enum):
    """Which view of the grouped data gets exported."""

    DUPLICATES = "duplicates"
    UNIQUES = "uniques"
    ALL = "all"


class FuzzyMatchingConfig(BaseModel):
    """Configuration for fuzzy key resolution.

    Enabling fuzzy matching changes import cost from linear to roughly
    quadratic in the number of distinct keys.
    """

    strategy: FuzzyMatchingStrategy = Field(
        default=FuzzyMatchingStrategy.LEVENSHTEIN, description="Matching algorithm"
    )
    min_string_length: int = Field(
        default=5, ge=1, description="Minimum key length to attempt fuzzy resolution"
    )
    max_deviation: int = Field(
        default=1, ge=1, description="Maximum edit distance and key length deviation"
    )

    model_config = ConfigDict(extra="forbid", frozen=True)


class DeduperConfig(BaseModel):
    """Configuration for the deduplication engine.

    Attributes:
        normalize: Function turning a raw string into a key. ``None`` uses
            the raw string itself. A registered name (``"company"``,
            ``"identity"``) is accepted and resolved to the function.
        ignored_suffixes: Suffixes removed from keys, applied after
            normalization. The preset name ``"company"`` selects the legal
            suffix list.
        fuzzy: Fuzzy matching settings, or ``None`` for exact keys only.

    Example:
        >>> config = DeduperConfig(
        ...     normalize="company",
        ...     ignored_suffixes="company",
        ...     fuzzy=FuzzyMatchingConfig(min_string_length=3),
        ... )
    """

    normalize: Optional[Callable[[str], str]] = Field(
        default=None, description="Key normalization function"
    )
    ignored_suffixes: Tuple[str, ...] = Field(
        default=(), description="Suffixes removed from keys, in removal order"
    )
    fuzzy: Optional[FuzzyMatchingConfig] = Field(
        default=None, description="Fuzzy matching settings"
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("normalize", mode="before")
    @classmethod
    def resolve_normalizer(cls, v: Any) -> Any:
        """Resolve registered normalizer names to functions."""
        if isinstance(v, str):
            try:
                return get_normalizer(v)
            except KeyError:
                raise ValueError(
                    f"unknown normalizer '{v}', expected one of {available_normalizers()}"
                )
        return v

    @field_validator("ignored_suffixes", mode="before")
    @classmethod
    def resolve_suffixes(cls, v: Any) -> Any:
        """Expand the ``company`` preset and accept comma-separated strings."""
        if v is None:
            return ()
        if isinstance(v, str):
            if v.strip().lower() == "company":
                return COMPANY_SUFFIXES
            return tuple(part.strip() for part in v.split(",") if part.strip())
        return v

    @property
    def fuzzy_enabled(self) -> bool:
        return self.fuzzy is not None

    def describe(self) -> Dict[str, Any]:
        """Summarize the configuration for logging and display."""
        normalize_name = "identity"
        if self.normalize is not None:
            normalize_name = getattr(self.normalize, "__name__", repr(self.normalize))
        summary: Dict[str, Any] = {
            "normalize": normalize_name,
            "ignored_suffixes": len(self.ignored_suffixes),
            "fuzzy": self.fuzzy_enabled,
        }
        if self.fuzzy is not None:
            summary["strategy"] = self.fuzzy.strategy.value
            summary["min_string_length"] = self.fuzzy.min_string_length
            summary["max_deviation"] = self.fuzzy.max_deviation
        return summary


class SourceConfig(BaseModel):
    """Where input lines are read from: a local file or a URL."""

    path: Optional[Path] = Field(default=None, description="Local input file")
    url: Optional[str] = Field(default=None, description="Remote input URL")
    encoding: str = Field(default="utf-8", description="Text encoding of the input")
    timeout: int = Field(default=30, gt=0, le=300, description="Request timeout in seconds")

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: Optional[str]) -> Optional[str]:
        if v and not re.match(r"^https?://", v, flags=re.IGNORECASE):
            raise ValueError("url must start with http:// or https://")
        return v

    def model_post_init(self, __context: Any) -> None:
        if self.path is not None and self.url:
            raise ValueError("source accepts either path or url, not both")


class OutputConfig(BaseModel):
    """Configuration for output settings."""

    path: Path = Field(default=Path("output.txt"), description="Output file")
    mode: ExportMode = Field(default=ExportMode.DUPLICATES, description="Exported view")
    include_original: bool = Field(
        default=False, description="Keep the first string of each duplicate group"
    )
    exclude_repeats: bool = Field(
        default=False, description="Emit each distinct string once per group"
    )
    separate_groups: bool = Field(
        default=False, description="Emit an empty line after each group"
    )
    restrict_to_unique_input: bool = Field(
        default=False, description="Only strings that were unique in the input"
    )
    csv_path: Optional[Path] = Field(default=None, description="Optional group CSV report")

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    """Main configuration for deduper."""

    deduplication: DeduperConfig = Field(
        default_factory=DeduperConfig, description="Deduplication settings"
    )
    source: SourceConfig = Field(default_factory=SourceConfig, description="Input settings")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


def load_config(config_path: Path) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated AppConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is invalid

    Example:
        >>> config = load_config(Path("deduper.yml"))
        >>> config.deduplication.fuzzy.max_deviation
        1
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        raw_config = yaml.safe_load(f) or {}

    try:
        return load_config_from_dict(raw_config)
    except Exception as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def load_config_from_dict(config_dict: Dict[str, Any]) -> AppConfig:
    """Load configuration from a dictionary, expanding environment variables."""
    return AppConfig(**_expand_env_vars(config_dict))


def merge_configs(base: AppConfig, override: Dict[str, Any]) -> AppConfig:
    """Merge override values into a configuration, returning a new one.

    Example:
        >>> merged = merge_configs(AppConfig(), {"output": {"mode": "uniques"}})
    """
    merged = _deep_merge(base.model_dump(), override)
    return AppConfig(**merged)


def _expand_env_vars(config: Any) -> Any:
    """Recursively expand environment variables in config.

    Supports ${VAR_NAME} and ${VAR_NAME:-default} syntax.
    """
    if isinstance(config, dict):
        return {k: _expand_env_vars(v) for k, v in config.items()}
    elif isinstance(config, list):
        return [_expand_env_vars(item) for item in config]
    elif isinstance(config, str):

        def replace_env_var(match: Any) -> str:
            var_expr = match.group(1)

            if ":-" in var_expr:
                var_name, default = var_expr.split(":-", 1)
                return str(os.getenv(var_name.strip(), default.strip()))

            value = os.getenv(var_expr.strip())
            if value is None:
                # Keep original if env var not found
                return str(match.group(0))
            return str(value)

        return re.sub(r"\$\{([^}]+)\}", replace_env_var, config)
    else:
        return config


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
