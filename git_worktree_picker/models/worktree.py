"""Worktree data models."""

from dataclasses import dataclass, field
from typing import Dict, Optional, Set

from git_worktree_picker.constants import (
    BARE_LABEL,
    DETACHED_LABEL,
    HEADS_PREFIX,
    SHORT_SHA_LENGTH,
)


@dataclass
class WorktreeRecord:
    """One block of `git worktree list --porcelain` output."""

    path: str
    head: Optional[str] = None
    branch_ref: Optional[str] = None  # refs/heads/<name>, None when detached
    is_bare: bool = False
    is_detached: bool = False
    is_locked: bool = False
    is_prunable: bool = False
    attributes: Dict[str, str] = field(default_factory=dict)
    flags: Set[str] = field(default_factory=set)

    @property
    def branch_name(self) -> str:
        """Display name of the checked out branch, or a detached label."""
        if self.branch_ref:
            if self.branch_ref.startswith(HEADS_PREFIX):
                return self.branch_ref[len(HEADS_PREFIX):]
            return self.branch_ref
        if self.is_bare:
            return BARE_LABEL
        if self.head:
            return f"{DETACHED_LABEL} at {self.head[:SHORT_SHA_LENGTH]}"
        return DETACHED_LABEL

    @property
    def has_branch(self) -> bool:
        return self.branch_ref is not None

    @property
    def short_head(self) -> str:
        return (self.head or "")[:SHORT_SHA_LENGTH]

    def __str__(self) -> str:
        return f"{self.branch_name} @ {self.path}"


@dataclass
class WorktreeEntry:
    """A worktree as shown in the picker."""

    record: WorktreeRecord
    is_current: bool = False

    @property
    def path(self) -> str:
        return self.record.path

    @property
    def branch(self) -> str:
        return self.record.branch_name

    @property
    def has_branch(self) -> bool:
        return self.record.has_branch

    @property
    def checked_out_branch(self) -> Optional[str]:
        """Branch name, or None for detached and bare worktrees."""
        return self.branch if self.has_branch else None

    @property
    def display(self) -> str:
        star = "* " if self.is_current else ""
        return f"{star}{self.branch} ({self.path})"

    @property
    def ordinal(self) -> str:
        """Text matched by the fuzzy filter."""
        return f"{self.branch} {self.path}"


def is_real_branch(branch: Optional[str]) -> bool:
    """True if ``branch`` names a branch rather than a detached or bare label.

    Only the exact label forms count; a branch may well be called
    ``detached-work``. Branch names cannot contain spaces, so
    ``"detached at <sha>"`` is never a branch.
    """
    if not branch:
        return False
    if branch in (BARE_LABEL, DETACHED_LABEL):
        return False
    return not branch.startswith(f"{DETACHED_LABEL} at ")
