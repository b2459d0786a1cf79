"""Decides which `git worktree add` form satisfies a requested branch."""

import os
from typing import Optional, Sequence

from git_worktree_picker.constants import DETACHED_PATH_SUFFIX
from git_worktree_picker.exceptions import ConflictError
from git_worktree_picker.models.branch import CatalogSnapshot
from git_worktree_picker.models.plan import (
    ConflictPolicy,
    ConflictResolution,
    OperationPlan,
    PlanKind,
)
from git_worktree_picker.models.worktree import WorktreeRecord
from git_worktree_picker.services.directory_service import same_path
from git_worktree_picker.services.git.branch_catalog import is_branch_attached
from git_worktree_picker.logging_config import get_logger

logger = get_logger(__name__)


class WorktreePlanner:
    """Pure decision function over a worktree snapshot and a branch catalog.

    Precedence is local branch, then remote branch, then a new branch, so an
    existing local branch is never shadowed by a fresh one.
    """

    def __init__(
        self,
        records: Sequence[WorktreeRecord],
        catalog: CatalogSnapshot,
        base_dir: str,
    ):
        """Initialize the planner.

        Args:
            records: Worktree snapshot the decision is based on
            catalog: Branch catalog snapshot
            base_dir: Directory relative worktree paths are resolved against
        """
        self.records = list(records)
        self.catalog = catalog
        self.base_dir = base_dir

    def resolve_path(self, path: Optional[str], branch: str) -> str:
        """Absolute target path; defaults to the branch name under base_dir."""
        target = os.path.expanduser(path) if path else branch
        return os.path.normpath(os.path.join(self.base_dir, target))

    def plan(
        self,
        requested_branch: str,
        conflict_policy: Optional[ConflictPolicy] = None,
        path: Optional[str] = None,
        start_point: Optional[str] = None,
    ) -> OperationPlan:
        """Plan the worktree for ``requested_branch``.

        Raises:
            ValueError: if the branch name is empty
            ConflictError: if the branch is attached elsewhere and no policy says
                what to do about it
        """
        branch = (requested_branch or "").strip()
        if not branch:
            raise ValueError("Branch name cannot be empty")

        attached, attached_path = is_branch_attached(self.records, branch)
        if attached:
            return self._plan_conflict(branch, attached_path, conflict_policy, path, start_point)

        target = self.resolve_path(path, branch)

        if self.catalog.has_local(branch):
            plan = OperationPlan(PlanKind.ATTACH_EXISTING_LOCAL, branch, branch, target)
        else:
            remote_ref = self.catalog.resolve_remote_ref(branch)
            if remote_ref:
                plan = OperationPlan(
                    PlanKind.ATTACH_AS_REMOTE_TRACKING, branch, branch, target, remote_ref=remote_ref
                )
            else:
                plan = OperationPlan(
                    PlanKind.CREATE_NEW_LOCAL, branch, branch, target, start_point=start_point
                )

        logger.debug(f"Planned {plan.kind.value} for {branch} at {target}")
        return plan

    def _plan_conflict(
        self,
        branch: str,
        attached_path: Optional[str],
        policy: Optional[ConflictPolicy],
        path: Optional[str],
        start_point: Optional[str],
    ) -> OperationPlan:
        if policy is None:
            raise ConflictError(branch, attached_path)

        if policy.resolution is ConflictResolution.CANCEL:
            return OperationPlan(
                PlanKind.ABORT, branch, None, self.resolve_path(path, branch),
                attached_path=attached_path,
            )

        if policy.resolution is ConflictResolution.DETACH:
            target = self.resolve_path(path, branch)
            if self._occupied(target, attached_path):
                target = self.resolve_path(None, f"{branch}{DETACHED_PATH_SUFFIX}")
            return OperationPlan(
                PlanKind.CREATE_DETACHED, branch, None, target, attached_path=attached_path,
            )

        # Rename: decide again for the new name; a second conflict is not resolved
        logger.debug(f"{branch} is attached at {attached_path}, retrying as {policy.new_name}")
        if path and self._occupied(self.resolve_path(path, branch), attached_path):
            # Fall back to the new name's default directory
            path = None
        # A renamed new branch starts from the branch it stands in for
        plan = self.plan(policy.new_name, None, path, start_point or branch)
        return OperationPlan(
            plan.kind,
            branch,
            plan.branch,
            plan.path,
            remote_ref=plan.remote_ref,
            start_point=plan.start_point,
            attached_path=attached_path,
        )

    @staticmethod
    def _occupied(target: str, attached_path: Optional[str]) -> bool:
        """True if ``target`` is the worktree the conflicting branch lives in."""
        if not attached_path:
            return False
        if same_path(target, attached_path):
            logger.debug(f"{target} already holds the branch, choosing another path")
            return True
        return False
