"""Command-line argument parsing for git-worktree-picker."""

import argparse
from typing import List, Optional

from git_worktree_picker.__version__ import __version__
from git_worktree_picker.constants import (
    ANSWER_FORCE,
    ANSWER_NO,
    ANSWER_YES,
    CHDIR_MODES,
    OPEN_AFTER_MODES,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-worktree-picker",
        description="Pick, create, switch and delete git worktrees",
        epilog="Without a command, opens the interactive picker on a TTY and lists "
        "worktrees otherwise. Shell wrapper: "
        'cd "$(git-worktree-picker switch NAME --print-path)"',
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--version", action="version", version=f"git-worktree-picker {__version__}"
    )
    parser.add_argument(
        "-C", dest="directory", metavar="PATH", help="Run as if started in PATH"
    )
    parser.add_argument(
        "--chdir-mode",
        choices=CHDIR_MODES,
        help="Scope of the directory change after switching (default: git config or tab)",
    )
    parser.add_argument(
        "--open-after",
        choices=OPEN_AFTER_MODES,
        help="What to open after switching (default: git config or none)",
    )
    parser.add_argument(
        "--copy-file",
        dest="copy_files",
        action="append",
        metavar="NAME",
        help="File copied into new worktrees (repeatable; replaces the configured list)",
    )
    parser.add_argument(
        "--no-copy-files", action="store_true", help="Do not copy any files into new worktrees"
    )
    parser.add_argument("--remote", dest="remote_name", help="Remote probed first for branches")
    parser.add_argument(
        "--worktree-root", help="Base directory for new worktrees with a relative path"
    )
    parser.add_argument(
        "--interactive", action="store_true", help="Launch interactive TUI mode (default for TTY)"
    )
    parser.add_argument(
        "--no-interactive",
        action="store_true",
        help="Never prompt; fail instead (for scripts/automation)",
    )
    _add_print_path_argument(parser, default=False)

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    subparsers.add_parser("list", help="List worktrees")

    switch = subparsers.add_parser("switch", help="Switch to a worktree")
    switch.add_argument("target", nargs="?", help="Branch, path or directory name")
    _add_print_path_argument(switch)

    create = subparsers.add_parser("create", help="Create a worktree for a branch")
    create.add_argument("branch", nargs="?", help="Branch name (local, remote or new)")
    _add_create_arguments(create)

    create_from = subparsers.add_parser(
        "create-from", help="Create a worktree from an existing branch not checked out yet"
    )
    create_from.add_argument(
        "branch", nargs="?", help="Branch name (chosen from a list if omitted)"
    )
    _add_create_arguments(create_from)

    delete = subparsers.add_parser("delete", help="Delete a worktree")
    delete.add_argument("target", nargs="?", help="Branch, path or directory name")
    delete.add_argument("--force", action="store_true", help="Remove even with local changes")
    delete.add_argument(
        "--delete-branch",
        choices=[ANSWER_YES, ANSWER_NO, ANSWER_FORCE],
        help="Also delete the branch (-d for yes, -D for force); asked when omitted",
    )
    delete.add_argument("-y", "--yes", action="store_true", help="Skip confirmations")

    status = subparsers.add_parser("status", help="Show `git status` for a worktree")
    status.add_argument("target", nargs="?", help="Branch, path or directory name")

    return parser


def _add_print_path_argument(parser: argparse.ArgumentParser, default=argparse.SUPPRESS) -> None:
    # SUPPRESS keeps a subcommand from resetting the global flag
    parser.add_argument(
        "--print-path",
        action="store_true",
        default=default,
        help="Print the path switched to on stdout; messages go to stderr",
    )


def _add_create_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--path", help="Worktree path (default: the branch name)")
    parser.add_argument("--upstream", help="Upstream to set on the new branch")
    parser.add_argument("--start-point", help="Commit a new branch starts from (default: HEAD)")
    parser.add_argument(
        "--on-conflict",
        metavar="POLICY",
        help="detach, cancel or rename:NAME when the branch is checked out elsewhere",
    )
    parser.add_argument(
        "--switch",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Switch to the new worktree (asked when omitted)",
    )
    _add_print_path_argument(parser)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
