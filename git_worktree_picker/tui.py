"""Interactive worktree picker using Textual."""

import os
from typing import List, Optional

from rich.markup import escape
from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import DataTable, Footer, Input, Static

from .__version__ import __version__
from .constants import ANSWER_FORCE, ANSWER_YES, COLUMNS
from .exceptions import ConflictError, WorktreePickerError
from .formatters import (
    format_create_message,
    format_delete_messages,
    format_entry_row,
    format_switch_message,
)
from .models.plan import ConflictPolicy
from .models.results import SwitchResult
from .models.worktree import WorktreeEntry
from .services.filter_service import fuzzy_filter
from .ui.screens import (
    CONFLICT_CHOICES,
    YES_NO,
    YES_NO_FORCE,
    BranchPickerScreen,
    ConfirmScreen,
    InfoScreen,
    InputScreen,
)
from .ui.widgets import FilterInput, NonExpandingHeader, PreviewPane
from .logging_config import get_logger

logger = get_logger(__name__)

REFRESH_HOOK_NAME = "picker-table"


class WorktreePickerApp(App[Optional[SwitchResult]]):
    """Interactive TUI for git-worktree-picker.

    Returns the last switch made (or None) when the app exits.
    """

    TITLE = "Git Worktrees"
    SUB_TITLE = f"v{__version__}"

    CSS = """
    Screen {
        background: $surface;
    }

    #filter {
        dock: top;
    }

    #worktree-table {
        width: 3fr;
        height: 1fr;
    }

    #preview-container {
        width: 2fr;
        height: 1fr;
        border-left: solid $panel;
    }

    #status-bar {
        dock: bottom;
        height: auto;
        background: $panel;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "quit", "Quit"),
        Binding("ctrl+n", "create_new", "New Branch"),
        Binding("ctrl+b", "create_from_branch", "From Branch"),
        Binding("ctrl+d", "delete", "Delete"),
        Binding("ctrl+f", "force_delete", "Force Delete"),
        Binding("ctrl+x", "confirm_delete", "Delete..."),
        Binding("ctrl+r", "refresh", "Refresh"),
    ]

    def __init__(self, picker):
        super().__init__()
        self.picker = picker
        self.entries: List[WorktreeEntry] = []
        self.visible: List[WorktreeEntry] = []
        self.last_switch: Optional[SwitchResult] = None

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield NonExpandingHeader(show_clock=False, icon="")
        yield FilterInput(placeholder="Filter worktrees", id="filter")
        with Horizontal():
            yield DataTable(id="worktree-table", cursor_type="row", zebra_stripes=True)
            with VerticalScroll(id="preview-container"):
                yield PreviewPane(id="preview")
        yield Static(id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Set up the table when app starts."""
        table = self.query_one(DataTable)
        for col in COLUMNS:
            table.add_column(col.label, width=col.width or None, key=col.key)

        self.picker.hooks.register(REFRESH_HOOK_NAME, self._refresh_after_switch)
        self.refresh_entries()
        self.query_one(FilterInput).focus()

    def on_unmount(self) -> None:
        self.picker.hooks.unregister(REFRESH_HOOK_NAME)

    # Table

    def refresh_entries(self) -> None:
        """Re-read the worktree list and redraw."""
        try:
            self.entries = self.picker.list_entries()
        except WorktreePickerError as e:
            self.entries = []
            self._report_error(e)
        self._apply_filter()

    def _refresh_after_switch(self, path: str) -> None:
        self.call_later(self.refresh_entries)

    def _apply_filter(self) -> None:
        query = self.query_one(FilterInput).value
        self.visible = fuzzy_filter(query, self.entries, key=lambda entry: entry.ordinal)

        table = self.query_one(DataTable)
        table.clear()
        for entry in self.visible:
            row = format_entry_row(entry)
            table.add_row(*(row[col.key] for col in COLUMNS), key=entry.path)

        if self.visible:
            table.move_cursor(row=0)
        self._update_preview()
        self._update_status()

    @property
    def selected_entry(self) -> Optional[WorktreeEntry]:
        table = self.query_one(DataTable)
        if not self.visible or table.cursor_row is None:
            return None
        if 0 <= table.cursor_row < len(self.visible):
            return self.visible[table.cursor_row]
        return None

    def _update_preview(self) -> None:
        preview = self.query_one(PreviewPane)
        entry = self.selected_entry
        if entry is None:
            preview.show_lines([])
            return
        preview.show_lines(self.picker.preview(entry.path))

    def _update_status(self) -> None:
        current = next((entry for entry in self.entries if entry.is_current), None)
        where = f"{current.branch} ({current.path})" if current else self.picker.cwd
        self.query_one("#status-bar", Static).update(
            f"{len(self.visible)}/{len(self.entries)} worktrees | current: {escape(where)}"
        )

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "filter":
            self._apply_filter()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "filter":
            self.action_switch()

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        self._update_preview()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        self.action_switch()

    def action_cursor_up(self) -> None:
        self.query_one(DataTable).action_cursor_up()

    def action_cursor_down(self) -> None:
        self.query_one(DataTable).action_cursor_down()

    def action_refresh(self) -> None:
        self.refresh_entries()

    # Switch

    def action_switch(self) -> None:
        entry = self.selected_entry
        if entry is None:
            self.notify("No worktree selected", severity="warning")
            return
        self.switch_to(entry.path, entry.checked_out_branch)

    def switch_to(self, path: str, branch: Optional[str]) -> None:
        if self.picker.opener.is_interactive:
            with self.suspend():
                result = self.picker.switch(path, branch)
        else:
            result = self.picker.switch(path, branch)

        if result.ok:
            self.last_switch = result
        self._notify_messages(format_switch_message(result), error=not result.ok)

    # Delete

    def action_delete(self) -> None:
        self.delete_selected(force=False)

    def action_force_delete(self) -> None:
        self.delete_selected(force=True)

    @work(exclusive=True)
    async def delete_selected(self, force: bool) -> None:
        entry = self.selected_entry
        if entry is None:
            return
        await self._delete_entry(entry, force)

    @work(exclusive=True)
    async def action_confirm_delete(self) -> None:
        entry = self.selected_entry
        if entry is None:
            return
        answer = await self.push_screen_wait(
            ConfirmScreen(f"Delete worktree '{entry.path}'?", YES_NO_FORCE)
        )
        if answer not in (ANSWER_YES, ANSWER_FORCE):
            return
        await self._delete_entry(entry, answer == ANSWER_FORCE)

    async def _delete_entry(self, entry: WorktreeEntry, force: bool) -> None:
        result = self.picker.delete(entry.path, force=force, branch=entry.checked_out_branch)
        if result.removed and entry.has_branch:
            answer = await self.push_screen_wait(
                ConfirmScreen(f"Delete branch '{entry.branch}' too?", YES_NO_FORCE)
            )
            if answer in (ANSWER_YES, ANSWER_FORCE):
                result.branch_deleted, result.branch_error = self.picker.delete_branch(
                    entry.branch, force=answer == ANSWER_FORCE
                )

        self._notify_messages(format_delete_messages(result), error=not result.ok)
        self.refresh_entries()

    # Create

    @work(exclusive=True)
    async def action_create_new(self) -> None:
        branch = await self.push_screen_wait(InputScreen("New branch name"))
        if not branch:
            return
        await self._create_flow(branch)

    @work(exclusive=True)
    async def action_create_from_branch(self) -> None:
        try:
            branches = self.picker.available_branches()
        except WorktreePickerError as e:
            self._report_error(e)
            return
        if not branches:
            self.notify("No available branches.")
            return

        branch = await self.push_screen_wait(BranchPickerScreen(branches))
        if not branch:
            return
        await self._create_flow(branch)

    async def _create_flow(self, branch: str) -> None:
        policy = None
        try:
            try:
                plan = self.picker.plan_create(branch)
            except ConflictError as e:
                policy = await self._ask_conflict_policy(e)
                if policy is None:
                    return
                plan = self.picker.plan_create(branch, policy)
        except (WorktreePickerError, ValueError) as e:
            self._report_error(e)
            return

        if plan.is_abort:
            return

        # The default path follows the conflict decision
        default = os.path.relpath(plan.path, self.picker.base_dir())
        path = await self.push_screen_wait(InputScreen("Worktree path", default=default))
        if path is None:
            return
        upstream = await self.push_screen_wait(InputScreen("Upstream (optional)"))
        if upstream is None:
            return

        if path and path != default:
            try:
                plan = self.picker.plan_create(branch, policy, path=path)
            except (WorktreePickerError, ValueError) as e:
                self._report_error(e)
                return

        result = self.picker.execute_create(plan, upstream or None)
        self._notify_messages(format_create_message(plan, result), error=not result.ok)
        if not result.ok:
            return
        self.refresh_entries()

        answer = await self.push_screen_wait(ConfirmScreen("Switch to the new worktree?", YES_NO))
        if answer == ANSWER_YES:
            self.switch_to(plan.path, plan.branch)

    async def _ask_conflict_policy(self, conflict: ConflictError) -> Optional[ConflictPolicy]:
        answer = await self.push_screen_wait(ConfirmScreen(str(conflict), CONFLICT_CHOICES))
        if answer == "detach":
            return ConflictPolicy.detach()
        if answer == "rename":
            new_name = await self.push_screen_wait(InputScreen("New branch name"))
            if new_name:
                return ConflictPolicy.rename(new_name)
        return None

    # Reporting

    def _notify_messages(self, messages: List[str], error: bool = False) -> None:
        if error:
            self.push_screen(InfoScreen(Text.from_markup("\n".join(messages)).plain))
            return
        for message in messages:
            self.notify(message)

    def _report_error(self, error: Exception) -> None:
        logger.error(str(error))
        self.push_screen(InfoScreen(str(error)))

    async def action_quit(self) -> None:
        """Quit, returning the last switch."""
        self.exit(self.last_switch)
