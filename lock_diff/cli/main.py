"""Main CLI interface for LockDiff."""

import asyncio
from pathlib import Path
from typing import Dict, Optional, Tuple
import typer
from rich.console import Console
from rich.panel import Panel

from ..config import LockDiffConfig
from ..core.classifier import ChangeClassifier, ClassifiedChanges
from ..core.parsers import LockDiffError, LockfileDiffParser
from ..output.formatters import ConsoleFormatter, JSONFormatter
from ..sizes.client import PackageSizeClient
from ..utils.input import iter_diff_lines
from ..utils.logging import get_logger, setup_logging
from ..utils.performance import PerformanceMonitor

app = typer.Typer(
    name="lockdiff",
    help="Summarise which resolved package versions a yarn.lock diff adds, removes or updates",
    add_completion=False
)

console = Console()
err_console = Console(stderr=True)
logger = get_logger("CLI")

SIZES_NOTICE = (
    "Loading package sizes is an experimental feature. "
    "It will take longer and may still not always return valid results"
)


@app.command()
def diff(
    path: Optional[Path] = typer.Argument(
        None,
        help="Diff of a lockfile (e.g. `git diff yarn.lock > changes.diff`); reads stdin when omitted or '-'"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="List minor updates too and enable debug logging"
    ),
    table: bool = typer.Option(
        False,
        "--table",
        "-t",
        help="Render dependencies as a table"
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the report as JSON"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Also save the JSON report to this file"
    ),
    sizes_added: bool = typer.Option(
        False,
        "--sizes-added",
        help="Look up bundle sizes of added packages"
    ),
    sizes_removed: bool = typer.Option(
        False,
        "--sizes-removed",
        help="Look up bundle sizes of removed packages"
    ),
    performance: bool = typer.Option(
        False,
        "--performance",
        help="Show performance summary"
    )
) -> None:
    """Report added, removed and updated packages in a lockfile diff."""

    setup_logging(verbose=verbose)

    try:
        config = LockDiffConfig.from_env()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        err_console.print(f"Error: {e}", style="red", markup=False)
        raise typer.Exit(1)

    monitor = PerformanceMonitor(err_console)
    parser = LockfileDiffParser()
    classifier = ChangeClassifier()

    try:
        with monitor.measure("parse"):
            resolved = parser.parse(iter_diff_lines(path))
        with monitor.measure("classify"):
            changes = classifier.classify(resolved)
    except (LockDiffError, FileNotFoundError, PermissionError, ValueError) as e:
        logger.error(f"Diff failed: {e}")
        err_console.print(f"Error: {e}", style="red", markup=False)
        raise typer.Exit(1)

    added_sizes: Optional[Dict[str, int]] = None
    removed_sizes: Optional[Dict[str, int]] = None
    if sizes_added or sizes_removed:
        err_console.print(SIZES_NOTICE)
        added_sizes, removed_sizes = asyncio.run(
            _load_sizes(changes, config, monitor, sizes_added, sizes_removed)
        )

    json_formatter = JSONFormatter(output)
    results = json_formatter.format_changes(changes, {**(removed_sizes or {}), **(added_sizes or {})})

    if json_output:
        typer.echo(json_formatter.dumps(results))
    else:
        ConsoleFormatter(console, tabular=table, verbose=verbose).format_changes(
            changes, added_sizes=added_sizes, removed_sizes=removed_sizes
        )

    if output:
        json_formatter.save_results(results)

    if performance:
        monitor.print_summary()


async def _load_sizes(
    changes: ClassifiedChanges,
    config: LockDiffConfig,
    monitor: PerformanceMonitor,
    sizes_added: bool,
    sizes_removed: bool
) -> Tuple[Optional[Dict[str, int]], Optional[Dict[str, int]]]:
    """Look up sizes for the added and/or removed buckets.

    Args:
        changes: Classified change records
        config: Lookup configuration
        monitor: Performance monitor for lookup timings
        sizes_added: Size the added versions of added packages
        sizes_removed: Size the removed versions of removed packages

    Returns:
        Tuple of added and removed sizes; None for a bucket not requested
    """
    added_sizes = None
    removed_sizes = None

    async with PackageSizeClient(config, performance_monitor=monitor) as client:
        if sizes_added and changes.added:
            added_sizes = await client.load_sizes(changes.added, lambda r: r.added_versions)
        if sizes_removed and changes.removed:
            removed_sizes = await client.load_sizes(changes.removed, lambda r: r.removed_versions)

    return added_sizes, removed_sizes


@app.command()
def info() -> None:
    """Show LockDiff information."""

    console.print(Panel.fit(
        "[bold blue]LockDiff[/bold blue]\n"
        "Reads a lockfile diff and reports resolved package changes,\n"
        "highlighting major version upgrades",
        title="Information"
    ))

    parser = LockfileDiffParser()
    console.print(f"\n[bold]Supported Lockfiles:[/bold] {', '.join(parser.dialects)}")
    console.print("[bold]Example:[/bold] git diff HEAD~1 -- yarn.lock | lockdiff diff")


def main() -> None:
    """Main entry point for LockDiff CLI."""
    app()


if __name__ == "__main__":
    main()
