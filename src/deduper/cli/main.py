"""
Entry point for the ``deduper`` command.

Global options live on the ``cli`` group; every option can also be set
through a ``DEDUPER_*`` environment variable (``DEDUPER_CONFIG``,
``DEDUPER_RUN_MIN_LENGTH``, ...).
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click

from deduper import __version__
from deduper.cli.formatting import console, print_error
from deduper.cli.utils import setup_logging


@dataclass
class CLIContext:
    """Global options shared with subcommands."""

    config_path: Optional[Path] = None
    verbose: int = 0
    quiet: bool = False
    log_file: Optional[Path] = None


pass_context = click.make_pass_decorator(CLIContext, ensure=True)


@click.group(context_settings={"auto_envvar_prefix": "DEDUPER"})
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML config file (default: ./deduper.yml when present)",
)
@click.option("--verbose", "-v", count=True, help="More log output (-vv for debug)")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also append log records to this file",
)
@click.version_option(version=__version__, prog_name="deduper")
@click.pass_context
def cli(ctx, config: Optional[Path], verbose: int, quiet: bool, log_file: Optional[Path]):
    """
    deduper - find duplicate strings in large lists

    Groups strings such as company names that differ only in casing,
    punctuation, legal suffixes or small typos.
    """
    ctx.obj = CLIContext(config_path=config, verbose=verbose, quiet=quiet, log_file=log_file)
    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)


from deduper.cli.run import run  # noqa: E402

cli.add_command(run)


def main():
    """Console script entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        if any(arg.startswith("-v") or arg == "--verbose" for arg in sys.argv[1:]):
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
