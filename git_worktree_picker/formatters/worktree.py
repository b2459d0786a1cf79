"""Worktree row and status formatting."""

from typing import Dict, Sequence

from rich.text import Text

from git_worktree_picker.constants import CLEAN_STATUS, SYMBOL_CURRENT
from git_worktree_picker.models.worktree import WorktreeEntry, WorktreeRecord


def format_flags(record: WorktreeRecord) -> str:
    """Single-letter markers: L locked, P prunable, B bare."""
    flags = []
    if record.is_locked:
        flags.append("L")
    if record.is_prunable:
        flags.append("P")
    if record.is_bare:
        flags.append("B")
    return " ".join(flags)


def format_entry_row(entry: WorktreeEntry) -> Dict[str, str]:
    """Cell values keyed by column key."""
    return {
        "current": SYMBOL_CURRENT if entry.is_current else "",
        "branch": entry.branch,
        "head": entry.record.short_head,
        "path": entry.path,
        "flags": format_flags(entry.record),
    }


def format_status_lines(lines: Sequence[str]) -> Text:
    """Colour `git status --short --branch` output."""
    text = Text()
    for index, line in enumerate(lines):
        if index:
            text.append("\n")
        if line.startswith("##"):
            text.append(line, style="bold cyan")
        elif line.startswith("??") or line == CLEAN_STATUS:
            text.append(line, style="dim")
        elif "D" in line[:2]:
            text.append(line, style="red")
        elif line[:1].strip() and line[1:2] == " ":
            # Staged only
            text.append(line, style="green")
        else:
            text.append(line, style="yellow")
    return text
