"""Results of worktree lifecycle actions.

Actions report expected failures through these values instead of raising, so
callers decide explicitly which failures to surface and which to tolerate.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from git_worktree_picker.exceptions import WorktreePickerError
from git_worktree_picker.models.worktree import WorktreeRecord


@dataclass
class HookResult:
    """Outcome of notifying one refresh hook."""
    name: str
    ok: bool
    error: Optional[BaseException] = None


@dataclass
class CreateResult:
    record: Optional[WorktreeRecord] = None
    error: Optional[WorktreePickerError] = None
    copied_files: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SwitchResult:
    path: str
    branch: Optional[str] = None
    checked_out: bool = False
    hook_results: List[HookResult] = field(default_factory=list)
    callback_error: Optional[BaseException] = None
    open_error: Optional[WorktreePickerError] = None
    error: Optional[WorktreePickerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def failed_hooks(self) -> List[HookResult]:
        return [result for result in self.hook_results if not result.ok]


@dataclass
class DeleteResult:
    path: str
    removed: bool = False
    error: Optional[WorktreePickerError] = None
    branch: Optional[str] = None
    branch_deleted: bool = False
    branch_error: Optional[WorktreePickerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None
