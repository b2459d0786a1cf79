"""Formatting utilities for git-worktree-picker.

- worktree: worktree rows, flags and status preview lines
- messages: user-facing outcome messages for lifecycle actions
"""

from .worktree import format_flags, format_entry_row, format_status_lines
from .messages import (
    format_create_message,
    format_switch_message,
    format_delete_messages,
)

__all__ = [
    "format_flags",
    "format_entry_row",
    "format_status_lines",
    "format_create_message",
    "format_switch_message",
    "format_delete_messages",
]
