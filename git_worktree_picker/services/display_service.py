"""Display and formatting service for worktree information"""
from typing import Iterable, List, Optional, Sequence

from rich.console import Console
from rich.table import Table

from git_worktree_picker.constants import COLUMNS, LEGEND_TEXT
from git_worktree_picker.formatters import format_entry_row, format_status_lines
from git_worktree_picker.models.worktree import WorktreeEntry
from git_worktree_picker.logging_config import get_logger

logger = get_logger(__name__)


class DisplayService:
    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose

    def display_worktree_table(self, entries: Sequence[WorktreeEntry]) -> None:
        """Display a table of worktrees, current one highlighted."""
        if not entries:
            self.console.print("[yellow]No worktrees found.[/yellow]")
            return

        table = Table()
        for col in COLUMNS:
            table.add_column(col.label, no_wrap=col.key != "path")

        for entry in entries:
            row = format_entry_row(entry)
            table.add_row(
                *(row[col.key] for col in COLUMNS),
                style="bold green" if entry.is_current else None,
            )

        self.console.print(table)
        if self.verbose:
            self.console.print(LEGEND_TEXT)

    def display_status(self, path: str, lines: Sequence[str]) -> None:
        self.console.print(f"[bold]{path}[/bold]")
        self.console.print(format_status_lines(lines))

    def display_messages(self, messages: Iterable[str]) -> None:
        for message in messages:
            self.console.print(message)

    def display_error(self, message: str) -> None:
        self.console.print(f"[red]{message}[/red]")

    def display_branches(self, branches: List[str]) -> None:
        for index, branch in enumerate(branches, start=1):
            self.console.print(f"  [cyan]{index:>3}[/cyan]  {branch}")
