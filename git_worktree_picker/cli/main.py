"""Command-line interface for git-worktree-picker"""

import os
import sys
from typing import List, Optional, Tuple

from rich.console import Console
from rich.markup import escape

from git_worktree_picker.cli.args import parse_args
from git_worktree_picker.config import Config
from git_worktree_picker.constants import ANSWER_FORCE, ANSWER_NO, ANSWER_YES
from git_worktree_picker.core import WorktreePicker
from git_worktree_picker.exceptions import CancelledError, ConflictError, WorktreePickerError
from git_worktree_picker.formatters import (
    format_create_message,
    format_delete_messages,
    format_switch_message,
)
from git_worktree_picker.logging_config import get_logger, setup_logging
from git_worktree_picker.models.plan import ConflictPolicy, OperationPlan
from git_worktree_picker.models.worktree import WorktreeEntry
from git_worktree_picker.prompts import ConsolePrompter
from git_worktree_picker.services.display_service import DisplayService
from git_worktree_picker.services.hooks import HookRegistry

logger = get_logger(__name__)


def _config_overrides(args) -> dict:
    """Config values given on the command line; None means not given."""
    copy_files = [] if args.no_copy_files else args.copy_files
    return {
        "chdir_mode": args.chdir_mode,
        "open_after": args.open_after,
        "copy_files": copy_files,
        "remote_name": args.remote_name,
        "worktree_root": args.worktree_root,
        "verbose": args.verbose or None,
        "debug": args.debug or None,
    }


class CommandRunner:
    """Runs one CLI command against a WorktreePicker."""

    def __init__(
        self,
        picker: WorktreePicker,
        display: DisplayService,
        prompter: Optional[ConsolePrompter],
        print_path: bool = False,
    ):
        self.picker = picker
        self.display = display
        # None when prompting is disabled
        self.prompter = prompter
        self.print_path = print_path

    def _emit_path(self, path: str) -> None:
        if self.print_path:
            print(path)

    def _resolve_target(self, target: Optional[str], action: str) -> WorktreeEntry:
        if target:
            entry = self.picker.find_entry(target)
            if entry is None:
                raise WorktreePickerError(f"No worktree matches '{target}'")
            return entry

        if self.prompter is None:
            raise WorktreePickerError(f"{action} needs a worktree (branch, path or name)")
        entries = self.picker.list_entries()
        labels = [entry.display for entry in entries]
        choice = self.prompter.choose(f"Select a worktree to {action}", labels)
        if choice is None:
            raise CancelledError(action)
        return entries[labels.index(choice)]

    def list_worktrees(self, args) -> int:
        self.display.display_worktree_table(self.picker.list_entries())
        return 0

    def status(self, args) -> int:
        entry = self._resolve_target(args.target, "inspect")
        self.display.display_status(entry.path, self.picker.preview(entry.path))
        return 0

    def switch(self, args) -> int:
        entry = self._resolve_target(args.target, "switch to")
        return self._switch(entry.path, entry.checked_out_branch)

    def _switch(self, path: str, branch: Optional[str]) -> int:
        result = self.picker.switch(path, branch)
        self.display.display_messages(format_switch_message(result))
        if not result.ok:
            return 1
        self._emit_path(result.path)
        return 0

    def create(self, args) -> int:
        branch = args.branch
        if not branch:
            if self.prompter is None:
                raise WorktreePickerError("create needs a branch name")
            branch = self.prompter.ask("Branch name")
            if not branch:
                raise CancelledError("create worktree")
        return self._create(branch, args)

    def create_from(self, args) -> int:
        branches = self.picker.available_branches()
        branch = args.branch
        if branch:
            if branch not in branches:
                raise WorktreePickerError(
                    f"Branch '{branch}' does not exist or is already checked out"
                )
        else:
            if not branches:
                self.display.display_messages(["[yellow]No available branches.[/yellow]"])
                return 0
            if self.prompter is None:
                self.display.display_branches(branches)
                raise WorktreePickerError("create-from needs a branch name")
            branch = self.prompter.choose("Available branches", branches)
            if branch is None:
                raise CancelledError("create worktree")
        return self._create(branch, args)

    def _create(self, branch: str, args) -> int:
        plan, policy = self._plan(branch, args, args.path)
        if args.path is None and self.prompter is not None:
            # The default path follows the conflict decision
            default = os.path.relpath(plan.path, self.picker.base_dir())
            path = self.prompter.ask("Worktree path", default=default)
            if path is None:
                raise CancelledError("create worktree")
            if path != default:
                plan = self.picker.plan_create(branch, policy, path, args.start_point)

        result = self.picker.execute_create(plan, args.upstream)
        self.display.display_messages(format_create_message(plan, result))
        if not result.ok:
            return 1

        switch = args.switch
        if switch is None:
            switch = self.print_path
            if not switch and self.prompter is not None:
                switch = self.prompter.confirm("Switch to the new worktree?") == ANSWER_YES
        if switch:
            return self._switch(plan.path, plan.branch)
        return 0

    def _plan(
        self, branch: str, args, path: Optional[str]
    ) -> Tuple[OperationPlan, Optional[ConflictPolicy]]:
        """Plan ``branch``, asking how to resolve a conflict when possible."""
        policy = ConflictPolicy.parse(args.on_conflict) if args.on_conflict else None
        try:
            plan = self.picker.plan_create(branch, policy, path, args.start_point)
        except ConflictError as e:
            if self.prompter is None:
                raise
            policy = self.prompter.choose_conflict(e.branch, e.attached_path)
            if policy is None:
                raise CancelledError("create worktree")
            plan = self.picker.plan_create(branch, policy, path, args.start_point)
        if plan.is_abort:
            raise CancelledError("create worktree")
        return plan, policy

    def delete(self, args) -> int:
        entry = self._resolve_target(args.target, "delete")

        force = args.force
        if self.prompter is not None and not args.yes:
            answer = self.prompter.confirm(
                f"Delete worktree '{entry.path}'?", (ANSWER_YES, ANSWER_NO, ANSWER_FORCE)
            )
            if answer not in (ANSWER_YES, ANSWER_FORCE):
                raise CancelledError("delete worktree")
            force = force or answer == ANSWER_FORCE

        branch_deletion = args.delete_branch
        if branch_deletion is None:
            if self.prompter is not None and not args.yes:
                branch_deletion = self.prompter.confirm_branch_deletion
            else:
                branch_deletion = ANSWER_NO

        result = self.picker.delete(
            entry.path,
            force=force,
            branch=entry.checked_out_branch,
            branch_deletion=branch_deletion,
        )
        self.display.display_messages(format_delete_messages(result))
        if not result.ok or result.branch_error:
            return 1
        return 0


COMMANDS = {
    "list": CommandRunner.list_worktrees,
    "status": CommandRunner.status,
    "switch": CommandRunner.switch,
    "create": CommandRunner.create,
    "create-from": CommandRunner.create_from,
    "delete": CommandRunner.delete,
}


def run_tui(picker: WorktreePicker, print_path: bool) -> int:
    from git_worktree_picker.tui import WorktreePickerApp

    app = WorktreePickerApp(picker)
    result = app.run()
    if print_path and result is not None:
        print(result.path)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    debug = False
    console = Console()
    try:
        parsed_args = parse_args(argv)
        debug = parsed_args.debug
        if parsed_args.print_path:
            # stdout carries only the path
            console = Console(stderr=True)

        is_tty = sys.stdin.isatty()
        use_tui = parsed_args.command is None and not parsed_args.no_interactive and (
            parsed_args.interactive or is_tty
        )
        can_prompt = not parsed_args.no_interactive and (parsed_args.interactive or is_tty)

        setup_logging(verbose=parsed_args.verbose, debug=debug, tui_mode=use_tui)

        if parsed_args.directory:
            os.chdir(parsed_args.directory)

        config = Config.from_git_config(os.getcwd()).merged(_config_overrides(parsed_args))
        if debug:
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")

        picker = WorktreePicker(config, hooks=HookRegistry.from_entry_points())

        if use_tui:
            return run_tui(picker, parsed_args.print_path)

        runner = CommandRunner(
            picker,
            DisplayService(console, verbose=config.verbose),
            ConsolePrompter(console) if can_prompt else None,
            print_path=parsed_args.print_path,
        )
        return COMMANDS[parsed_args.command or "list"](runner, parsed_args)
    except CancelledError as e:
        logger.debug(str(e))
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
