"""Data models for git-worktree-picker."""

from .worktree import WorktreeRecord, WorktreeEntry, is_real_branch
from .branch import BranchOrigin, BranchCatalogEntry, CatalogSnapshot
from .plan import ConflictPolicy, ConflictResolution, OperationPlan, PlanKind
from .results import CreateResult, SwitchResult, DeleteResult, HookResult

__all__ = [
    "WorktreeRecord",
    "WorktreeEntry",
    "is_real_branch",
    "BranchOrigin",
    "BranchCatalogEntry",
    "CatalogSnapshot",
    "ConflictPolicy",
    "ConflictResolution",
    "OperationPlan",
    "PlanKind",
    "CreateResult",
    "SwitchResult",
    "DeleteResult",
    "HookResult",
]
