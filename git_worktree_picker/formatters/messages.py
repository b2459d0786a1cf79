"""Outcome messages shared by the CLI and the TUI (rich markup)."""

from typing import List

from rich.markup import escape

from git_worktree_picker.models.plan import OperationPlan
from git_worktree_picker.models.results import CreateResult, DeleteResult, SwitchResult


def format_create_message(plan: OperationPlan, result: CreateResult) -> List[str]:
    if result.error:
        return [f"[red]Failed to create worktree:[/red]\n{escape(str(result.error))}"]
    messages = [
        f"[green]Created worktree:[/green] {escape(plan.path)} ({escape(plan.describe())})"
    ]
    messages.extend(f"Copied {escape(name)} → {escape(plan.path)}" for name in result.copied_files)
    messages.extend(f"[yellow]{escape(warning)}[/yellow]" for warning in result.warnings)
    return messages


def format_switch_message(result: SwitchResult) -> List[str]:
    if result.error:
        return [f"[red]{escape(str(result.error))}[/red]"]
    branch = escape(result.branch or "detached")
    messages = [f"Switched to worktree: {escape(result.path)} ({branch})"]
    messages.extend(
        f"[yellow]Refresh hook '{escape(hook.name)}' failed: {escape(str(hook.error))}[/yellow]"
        for hook in result.failed_hooks
    )
    if result.callback_error:
        messages.append(
            f"[yellow]on_switch callback failed: {escape(str(result.callback_error))}[/yellow]"
        )
    if result.open_error:
        messages.append(f"[yellow]{escape(str(result.open_error))}[/yellow]")
    return messages


def format_delete_messages(result: DeleteResult) -> List[str]:
    if result.error:
        return [f"[red]Failed to delete worktree:[/red]\n{escape(str(result.error))}"]
    messages = [f"Deleted worktree: {escape(result.path)}"]
    if result.branch_deleted:
        messages.append(f"Deleted branch: {escape(result.branch or '')}")
    elif result.branch_error:
        messages.append(f"[red]Failed to delete branch:[/red]\n{escape(str(result.branch_error))}")
    return messages
