"""Core functionality for git-worktree-picker."""

from .worktree_picker import WorktreePicker

__all__ = ["WorktreePicker"]
