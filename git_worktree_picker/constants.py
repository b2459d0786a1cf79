"""Shared constants for git-worktree-picker."""

from dataclasses import dataclass
from typing import List


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


# Unified column definitions for both CLI and TUI
COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("current", " ", 2),
    ColumnDefinition("branch", "Branch", 30),
    ColumnDefinition("head", "HEAD", 8),
    ColumnDefinition("path", "Path", 0),
    ColumnDefinition("flags", "Flags", 10),
]


# Ref prefixes
HEADS_PREFIX = "refs/heads/"
REMOTES_PREFIX = "refs/remotes/"

# Branch labels for worktrees without a branch
DETACHED_LABEL = "detached"
BARE_LABEL = "(bare)"
SHORT_SHA_LENGTH = 7
# Default directory suffix for a detached copy of an attached branch
DETACHED_PATH_SUFFIX = "-detached"

# Symbol constants
SYMBOL_CURRENT = "*"
CURRENT_MARKER = f"{SYMBOL_CURRENT} "
CLEAN_STATUS = "(clean)"

# Allowed configuration values
CHDIR_MODES = ["process", "window", "tab"]
OPEN_AFTER_MODES = ["none", "file-manager", "editor"]
DEFAULT_COPY_FILES = [".env", ".env.local"]
DEFAULT_REMOTE = "origin"

# Answers understood by the three-way prompts
ANSWER_YES = "yes"
ANSWER_NO = "no"
ANSWER_FORCE = "force"

# Entry point group for externally provided refresh hooks
REFRESH_HOOKS_GROUP = "git_worktree_picker.refresh_hooks"

# Section read from `git config`
GIT_CONFIG_SECTION = "worktree-picker"

# Legend text for CLI summary
LEGEND_TEXT = """
Legend:
* = Current worktree      L = Locked
P = Prunable (missing)    B = Bare repository
"""
