"""Output formatters for LockDiff results."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..core.classifier import ChangeRecord, ClassifiedChanges
from ..sizes.client import to_kilobytes, total_size
from ..utils.logging import get_logger


def _join_versions(versions: Sequence[str]) -> str:
    return ", ".join(versions)


def describe_versions(record: ChangeRecord) -> str:
    """Describe the version change of a record.

    Args:
        record: Change record

    Returns:
        The added or removed versions alone for one-sided changes,
        otherwise ``removed => added``
    """
    if record.added_versions and not record.removed_versions:
        return _join_versions(record.added_versions)
    if record.removed_versions and not record.added_versions:
        return _join_versions(record.removed_versions)
    return f"{_join_versions(record.removed_versions)} => {_join_versions(record.added_versions)}"


class ConsoleFormatter:
    """Rich console formatter for LockDiff output."""

    def __init__(
        self,
        console: Optional[Console] = None,
        tabular: bool = False,
        verbose: bool = False
    ) -> None:
        """Initialize the console formatter.

        Args:
            console: Rich console instance
            tabular: Render records as a table instead of one line each
            verbose: Also list updates that are not major upgrades
        """
        self.console = console or Console()
        self.tabular = tabular
        self.verbose = verbose
        self.logger = get_logger("ConsoleFormatter")

    def format_changes(
        self,
        changes: ClassifiedChanges,
        added_sizes: Optional[Dict[str, int]] = None,
        removed_sizes: Optional[Dict[str, int]] = None
    ) -> None:
        """Format and display a classified diff.

        Args:
            changes: Classified change records
            added_sizes: Bytes per added dependency, when sizes were loaded
            removed_sizes: Bytes per removed dependency, when sizes were loaded
        """
        if changes.is_empty():
            self.console.print("No resolved version changes", style="dim")
            return

        sections_printed = 0

        if changes.added:
            self._print_section(
                f"{len(changes.added)} packages added", "red", changes.added, added_sizes
            )
            if added_sizes is not None:
                self.console.print(f"Total size added: {to_kilobytes(total_size(added_sizes))}KB")
            sections_printed += 1

        if changes.removed:
            if sections_printed:
                self.console.print()
            self._print_section(
                f"{len(changes.removed)} packages removed", "green", changes.removed, removed_sizes
            )
            if removed_sizes is not None:
                self.console.print(f"Total size removed: {to_kilobytes(total_size(removed_sizes))}KB")
            sections_printed += 1

        shown = changes.updated if self.verbose else changes.major_updates()
        if shown:
            if sections_printed:
                self.console.print()
            self._print_section(f"{len(shown)} packages updated", None, shown, None)
            sections_printed += 1

        hidden = [] if self.verbose else changes.minor_updates()
        if hidden:
            if sections_printed:
                self.console.print()
            self.console.print(f"{len(hidden)} packages have minor updates")

    def _print_section(
        self,
        title: str,
        style: Optional[str],
        records: List[ChangeRecord],
        sizes: Optional[Dict[str, int]]
    ) -> None:
        self.console.print(Text(title, style=style or ""))
        if self.tabular:
            self.console.print(self._create_changes_table(records, sizes))
        else:
            for record in records:
                # one unwrapped line per record; click drops the colour when piped
                typer.echo(self._format_line(record, sizes), file=self.console.file)

    def _format_line(self, record: ChangeRecord, sizes: Optional[Dict[str, int]]) -> str:
        """Render one record as ``name[ major upgrade]<TAB>versions``."""
        line = record.dependency
        if record.is_major_upgrade:
            line += typer.style(" major upgrade", fg="yellow")
        line += f"\t{describe_versions(record)}"
        if sizes is not None and record.dependency in sizes:
            line += typer.style(f"\t{to_kilobytes(sizes[record.dependency])}KB", dim=True)
        return line

    def _create_changes_table(
        self,
        records: List[ChangeRecord],
        sizes: Optional[Dict[str, int]]
    ) -> Table:
        """Create a table of change records.

        Args:
            records: Records to list
            sizes: Bytes per dependency, or None to omit the size column

        Returns:
            Rich table with one row per record
        """
        table = Table(show_header=True)

        table.add_column("Dependency", style="cyan", no_wrap=True)
        table.add_column("Added", style="red")
        table.add_column("Removed", style="green")
        table.add_column("Major", style="yellow")
        if sizes is not None:
            table.add_column("Size", style="blue", justify="right")

        for record in records:
            row = [
                record.dependency,
                _join_versions(record.added_versions),
                _join_versions(record.removed_versions),
                "yes" if record.is_major_upgrade else "",
            ]
            if sizes is not None:
                size = sizes.get(record.dependency)
                row.append(f"{to_kilobytes(size)}KB" if size is not None else "")
            table.add_row(*row)

        return table


class JSONFormatter:
    """JSON formatter for LockDiff output."""

    def __init__(self, output_file: Optional[Path] = None) -> None:
        """Initialize the JSON formatter.

        Args:
            output_file: Optional output file path
        """
        self.output_file = output_file
        self.logger = get_logger("JSONFormatter")

    def format_changes(
        self,
        changes: ClassifiedChanges,
        sizes: Optional[Dict[str, int]] = None
    ) -> Dict[str, List[Dict[str, Any]]]:
        """Format classified changes as JSON data.

        Args:
            changes: Classified change records
            sizes: Optional bytes per dependency, added as ``size``

        Returns:
            Dictionary with ``added``, ``removed`` and ``updated`` lists
        """
        result = changes.to_dict()

        if sizes:
            for records in result.values():
                for record in records:
                    if record["dependency"] in sizes:
                        record["size"] = sizes[record["dependency"]]

        return result

    def dumps(self, results: Dict[str, Any]) -> str:
        return json.dumps(results, indent=2, ensure_ascii=False)

    def save_results(
        self,
        results: Dict[str, Any],
        output_file: Optional[Path] = None
    ) -> None:
        """Save results to JSON file.

        Args:
            results: Results dictionary
            output_file: Output file path (uses instance default if None)
        """
        file_path = output_file or self.output_file
        if not file_path:
            raise ValueError("No output file specified")

        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(self.dumps(results))

            self.logger.info(f"Results saved to {file_path}")
        except IOError as e:
            self.logger.error(f"Failed to save results to {file_path}: {e}")
            raise
