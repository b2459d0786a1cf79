"""Textual UI components for git-worktree-picker."""
