"""
Terminal output for the deduper CLI.

Everything here prints through a Rich console bound to stderr, so the
terminal report never mixes with exported lines piped from stdout.
"""

from typing import Any, Dict, Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from deduper.core.models import DedupStatistics, Group

console = Console(stderr=True)


def print_header(title: str, subtitle: Optional[str] = None) -> None:
    console.print()
    console.rule(f"[bold blue]{title}[/bold blue]")
    if subtitle:
        console.print(f"[dim]{subtitle}[/dim]")


def print_section(title: str) -> None:
    console.print(f"\n[bold]{title}[/bold]")


def print_error(message: str) -> None:
    console.print(f"[red]✗ {message}[/red]")


def print_warning(message: str) -> None:
    console.print(f"[yellow]⚠[/yellow] {message}")


def print_settings(settings: Dict[str, Any]) -> None:
    """Print run settings as aligned ``name: value`` lines."""
    print_section("Settings")
    width = max((len(name) for name in settings), default=0)
    for name, value in settings.items():
        if isinstance(value, bool):
            value = "on" if value else "off"
        console.print(f"  [cyan]{name.ljust(width)}[/cyan]  {value}")


def print_statistics(stats: DedupStatistics) -> None:
    """Print import counters and the duplicate rate."""
    table = Table(title="Import", show_header=False, box=None, title_justify="left")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Lines read", f"{stats.lines_read:,}")
    table.add_row("Lines imported", f"{stats.lines_imported:,}")
    if stats.lines_dropped:
        table.add_row("Dropped (empty key)", f"[yellow]{stats.lines_dropped:,}[/yellow]")
    table.add_row("Groups", f"{stats.groups:,}")
    table.add_row("Groups with duplicates", f"{stats.duplicate_groups:,}")
    if stats.settings.get("fuzzy"):
        table.add_row("Fuzzy redirects", f"{stats.fuzzy_redirects:,}")
    table.add_row("Duplicate rate", f"{stats.duplicate_rate:.1%}")

    console.print(table)


def print_group_preview(groups: Iterable[Group], limit: int = 10) -> None:
    """Print the largest duplicate groups, most occurrences first."""
    largest = sorted(
        (group for group in groups if group.is_duplicate),
        key=lambda group: group.total_count,
        reverse=True,
    )[:limit]
    if not largest:
        return

    table = Table(title=f"Top {len(largest)} duplicate groups", show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Representative")
    table.add_column("Variants", justify="right")
    table.add_column("Lines", justify="right", style="green")

    for group in largest:
        table.add_row(
            group.key, group.representative, str(group.distinct_count), f"{group.total_count:,}"
        )
    console.print(table)


def print_summary_panel(title: str, content: Dict[str, Any], success: bool = True) -> None:
    lines = [f"[cyan]{name}:[/cyan] {value}" for name, value in content.items()]
    console.print(
        Panel("\n".join(lines), title=f"[bold]{title}[/bold]", border_style="green" if success else "red")
    )


def format_duration(seconds: float) -> str:
    """Format a duration as seconds, minutes or hours."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    if seconds < 3600:
        return f"{seconds / 60:.1f}m"
    return f"{seconds / 3600:.1f}h"
