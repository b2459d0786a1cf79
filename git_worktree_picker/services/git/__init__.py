"""Git-related services for git-worktree-picker."""

from .process_runner import ProcessRunner, ProcessResult
from .registry import WorktreeRegistry, parse_registry
from .branch_catalog import BranchCatalog, is_branch_attached

__all__ = [
    "ProcessRunner",
    "ProcessResult",
    "WorktreeRegistry",
    "parse_registry",
    "BranchCatalog",
    "is_branch_attached",
]
