"""Custom widgets for the git-worktree-picker TUI."""

from typing import Sequence

from textual.binding import Binding
from textual.events import Click
from textual.widgets import Header, Input, Static

from git_worktree_picker.formatters import format_status_lines


class NonExpandingHeader(Header):
    """Header widget that doesn't expand/contract on click."""

    def on_click(self, event: Click) -> None:
        """Override to disable click-to-expand behavior."""
        event.stop()


class FilterInput(Input):
    """Filter box that forwards list navigation and deletion keys to the app.

    Input binds ctrl+d and ctrl+f itself; these bindings take precedence.
    """

    BINDINGS = [
        Binding("up", "app.cursor_up", "Up", show=False),
        Binding("down", "app.cursor_down", "Down", show=False),
        Binding("ctrl+d", "app.delete", "Delete"),
        Binding("ctrl+f", "app.force_delete", "Force Delete"),
    ]


class PreviewPane(Static):
    """Shows `git status --short --branch` for the highlighted worktree."""

    DEFAULT_CSS = """
    PreviewPane {
        width: 100%;
        height: auto;
        padding: 0 1;
    }
    """

    def show_lines(self, lines: Sequence[str]) -> None:
        self.update(format_status_lines(lines))
