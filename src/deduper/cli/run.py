"""
Run command.

This command imports strings from a file or URL, groups them and writes the
selected view (duplicates, uniques or everything) to an output file.
"""

import logging
import time
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import click
from pydantic import ValidationError

from deduper.cli.formatting import (
    console,
    format_duration,
    print_group_preview,
    print_header,
    print_section,
    print_settings,
    print_statistics,
    print_summary_panel,
    print_warning,
)
from deduper.cli.main import pass_context
from deduper.cli.utils import build_fuzzy_override, load_config
from deduper.core.config import AppConfig, ExportMode, OutputConfig, merge_configs
from deduper.dedup import StringDeduplicator
from deduper.export import CSVExporter, TextExporter
from deduper.normalization import available_normalizers
from deduper.sources import get_source
from deduper.utils.exceptions import ConfigurationError, DeduplicationError, SourceError
from deduper.utils.logging import PerformanceLogger

logger = logging.getLogger(__name__)


def select_view(deduper: StringDeduplicator, output: OutputConfig) -> Iterator[str]:
    """Pick the query matching the configured export mode."""
    if output.mode == ExportMode.UNIQUES:
        return deduper.get_uniques(restrict_to_unique_input=output.restrict_to_unique_input)
    if output.mode == ExportMode.ALL:
        return deduper.get_all(
            exclude_repeats=output.exclude_repeats, add_empty_string=output.separate_groups
        )
    return deduper.get_duplicates(
        include_original=output.include_original,
        exclude_repeats=output.exclude_repeats,
        add_empty_string=output.separate_groups,
    )


@click.command()
@click.option(
    "--input",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Input file with one string per line",
)
@click.option("--url", type=str, help="URL of a newline-delimited text file")
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: output.txt)",
)
@click.option(
    "--mode",
    type=click.Choice([m.value for m in ExportMode], case_sensitive=False),
    help="Which strings to export",
)
@click.option("--include-original", is_flag=True, help="Keep the first string of each duplicate group")
@click.option("--exclude-repeats", is_flag=True, help="Write literal repeats only once")
@click.option("--separate-groups", is_flag=True, help="Write an empty line after each group")
@click.option("--restrict-unique", is_flag=True, help="Uniques: only strings unique in the input")
@click.option(
    "--normalizer",
    type=click.Choice(list(available_normalizers()), case_sensitive=False),
    help="Key normalization",
)
@click.option(
    "--suffixes",
    type=str,
    help="Ignored suffixes: 'company' or a comma-separated list",
)
@click.option("--fuzzy", is_flag=True, help="Enable fuzzy key matching")
@click.option("--no-fuzzy", is_flag=True, help="Disable fuzzy key matching set in the config file")
@click.option(
    "--strategy",
    type=click.Choice(["levenshtein", "bitap"], case_sensitive=False),
    help="Fuzzy matching strategy (implies --fuzzy)",
)
@click.option("--min-length", type=int, help="Minimum key length for fuzzy matching (implies --fuzzy)")
@click.option("--max-deviation", type=int, help="Maximum edit distance (implies --fuzzy)")
@click.option(
    "--csv",
    "csv_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write a CSV report of all groups",
)
@click.option(
    "--preview",
    type=click.IntRange(min=0),
    default=0,
    help="Show the N largest duplicate groups",
)
@click.option("--dry-run", is_flag=True, help="Show stats without writing output")
@pass_context
def run(
    ctx,
    input_path: Optional[Path],
    url: Optional[str],
    output_path: Optional[Path],
    mode: Optional[str],
    include_original: bool,
    exclude_repeats: bool,
    separate_groups: bool,
    restrict_unique: bool,
    normalizer: Optional[str],
    suffixes: Optional[str],
    fuzzy: bool,
    no_fuzzy: bool,
    strategy: Optional[str],
    min_length: Optional[int],
    max_deviation: Optional[int],
    csv_path: Optional[Path],
    preview: int,
    dry_run: bool,
):
    """Find duplicate strings.

    Reads strings from a file or URL, groups strings whose normalized keys
    match (or nearly match with --fuzzy) and writes the chosen view.

    \b
    Examples:
      # Company names, duplicates including the first of each group
      deduper run --input names.txt --normalizer company --suffixes company --include-original

      # Fuzzy matching with Levenshtein distance 1 on keys of 5+ characters
      deduper run --input names.txt --normalizer company --fuzzy --min-length 5

      # Names that appear exactly once
      deduper run --url https://example.com/names.txt --mode uniques --restrict-unique
    """
    start_time = time.time()

    if fuzzy and no_fuzzy:
        raise click.UsageError("Use either --fuzzy or --no-fuzzy, not both")

    print_header("deduper", "String deduplication")

    config = load_config(ctx.config_path)
    config = apply_overrides(
        config,
        input_path=input_path,
        url=url,
        output_path=output_path,
        mode=mode,
        include_original=include_original or None,
        exclude_repeats=exclude_repeats or None,
        separate_groups=separate_groups or None,
        restrict_unique=restrict_unique or None,
        normalizer=normalizer,
        suffixes=suffixes,
        fuzzy=build_fuzzy_override(
            False if no_fuzzy else (True if fuzzy else None), strategy, min_length, max_deviation
        ),
        csv_path=csv_path,
    )

    try:
        source = get_source(config.source)
        deduper = StringDeduplicator(config.deduplication)
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    print_settings(
        {
            "input": source.name,
            "output": "(dry run)" if dry_run else str(config.output.path),
            "mode": config.output.mode.value,
            **config.deduplication.describe(),
        }
    )

    print_section("Importing")
    try:
        with console.status("Reading and grouping strings..."):
            with PerformanceLogger("Import", logger=logger, unit="lines") as perf:
                perf.count = deduper.import_strings(source)
    except (SourceError, DeduplicationError) as e:
        raise click.ClickException(f"Import aborted: {e}")

    stats = deduper.get_statistics()
    console.print()
    print_statistics(stats)
    if preview:
        print_group_preview(deduper.groups(), limit=preview)

    if dry_run:
        print_warning("Dry run, no files written")
        return

    exporter = TextExporter()
    if not exporter.export(select_view(deduper, config.output), config.output.path):
        raise click.ClickException(f"Could not write {config.output.path}")

    summary = {
        config.output.mode.value: f"{config.output.path} ({exporter.lines_written:,} lines)"
    }
    if config.output.csv_path:
        if CSVExporter().export(deduper.groups(), config.output.csv_path):
            summary["groups"] = str(config.output.csv_path)
        else:
            print_warning(f"Could not write {config.output.csv_path}")
    summary["elapsed"] = format_duration(time.time() - start_time)

    console.print()
    print_summary_panel("Done", summary)


def apply_overrides(
    config: AppConfig,
    input_path: Optional[Path] = None,
    url: Optional[str] = None,
    output_path: Optional[Path] = None,
    mode: Optional[str] = None,
    include_original: Optional[bool] = None,
    exclude_repeats: Optional[bool] = None,
    separate_groups: Optional[bool] = None,
    restrict_unique: Optional[bool] = None,
    normalizer: Optional[str] = None,
    suffixes: Optional[str] = None,
    fuzzy: Optional[Dict[str, Any]] = None,
    csv_path: Optional[Path] = None,
) -> AppConfig:
    """Merge command line options into the loaded configuration.

    Raises:
        click.ClickException: If the merged configuration is invalid
    """
    if input_path and url:
        raise click.UsageError("Use either --input or --url, not both")

    overrides: Dict[str, Dict[str, Any]] = {"deduplication": {}, "source": {}, "output": {}}

    if input_path:
        overrides["source"].update(path=input_path, url=None)
    if url:
        overrides["source"].update(url=url, path=None)

    output_options = {
        "path": output_path,
        "mode": mode,
        "include_original": include_original,
        "exclude_repeats": exclude_repeats,
        "separate_groups": separate_groups,
        "restrict_to_unique_input": restrict_unique,
        "csv_path": csv_path,
    }
    overrides["output"].update({k: v for k, v in output_options.items() if v is not None})

    if normalizer:
        overrides["deduplication"]["normalize"] = normalizer
    if suffixes is not None:
        overrides["deduplication"]["ignored_suffixes"] = (
            () if suffixes.strip().lower() == "none" else suffixes
        )
    if fuzzy is not None:
        overrides["deduplication"].update(fuzzy)

    try:
        return merge_configs(config, overrides)
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}")
    except ValueError as e:
        raise click.ClickException(str(e))
