"""Worktree lifecycle actions: list, create, switch, delete."""

import os
import shutil
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from git_worktree_picker.config import Config
from git_worktree_picker.constants import ANSWER_FORCE, ANSWER_YES, CLEAN_STATUS
from git_worktree_picker.exceptions import (
    CancelledError,
    CurrentWorktreeError,
    ParseError,
    ProcessError,
    WorktreePickerError,
)
from git_worktree_picker.models.plan import ConflictPolicy, OperationPlan, PlanKind
from git_worktree_picker.models.results import CreateResult, DeleteResult, SwitchResult
from git_worktree_picker.models.worktree import WorktreeEntry, WorktreeRecord, is_real_branch
from git_worktree_picker.services.directory_service import DirectoryContext, same_path
from git_worktree_picker.services.git import BranchCatalog, ProcessRunner, WorktreeRegistry
from git_worktree_picker.services.hooks import HookRegistry
from git_worktree_picker.services.opener_service import OpenerService
from git_worktree_picker.services.planner import WorktreePlanner
from git_worktree_picker.logging_config import get_logger

logger = get_logger(__name__)

# "yes", "no", "force", or None; or a callable asked with the branch name
BranchDeletion = Union[None, str, Callable[[str], Optional[str]]]


class WorktreePicker:
    """Main class for managing git worktrees.

    Git always runs in the active directory, which is re-read for every
    action. Nothing about the worktree list is cached between actions.
    """

    def __init__(
        self,
        config: Union[Config, dict, None] = None,
        runner: Optional[ProcessRunner] = None,
        hooks: Optional[HookRegistry] = None,
        directory: Optional[DirectoryContext] = None,
        opener: Optional[OpenerService] = None,
    ):
        """Initialize WorktreePicker.

        Args:
            config: Config object or dict (defaults when None)
            runner: Process runner used for every git call
            hooks: Refresh hooks notified after a switch
            directory: Directory context; built from config.chdir_mode when None
            opener: Post-switch opener; built from config.open_after when None
        """
        if config is None:
            config = Config()
        elif isinstance(config, dict):
            config = Config.from_dict(config)
        self.config = config
        self.runner = runner or ProcessRunner()
        self.hooks = hooks if hooks is not None else HookRegistry()
        self.directory = directory or DirectoryContext(config.chdir_mode)
        self.opener = opener or OpenerService(config.open_after)

    @property
    def cwd(self) -> str:
        return self.directory.current()

    @property
    def registry(self) -> WorktreeRegistry:
        return WorktreeRegistry(self.runner, self.cwd)

    @property
    def catalog(self) -> BranchCatalog:
        return BranchCatalog(self.runner, self.cwd, self.config.remote_name)

    def _git(self, *args: str, cwd: Optional[str] = None):
        return self.runner.run(["git", *args], cwd=cwd or self.cwd)

    # Listing

    def list_entries(self) -> List[WorktreeEntry]:
        """All worktrees, with the one in the active directory marked current."""
        return [
            WorktreeEntry(record, self.directory.is_current(record.path))
            for record in self.registry.snapshot()
        ]

    def find_entry(self, target: str) -> Optional[WorktreeEntry]:
        """Find a worktree by branch name, path, or directory name."""
        entries = self.list_entries()
        for matches in (
            lambda e: e.branch == target,
            lambda e: same_path(e.path, target),
            lambda e: os.path.basename(e.path.rstrip(os.sep)) == target,
        ):
            found = next((e for e in entries if matches(e)), None)
            if found:
                return found
        return None

    def available_branches(self) -> List[str]:
        """Branches that can be checked out in a new worktree."""
        return self.catalog.list_available_branch_names(self.registry.snapshot())

    def preview(self, path: str) -> List[str]:
        """Lines of `git status --short --branch` for a worktree."""
        if not os.path.isdir(path):
            return [f"(missing) {path}"]
        result = self._git("status", "--short", "--branch", cwd=path)
        if not result.ok:
            return result.stderr_lines or [f"git status exited {result.returncode}"]
        return result.stdout_lines or [CLEAN_STATUS]

    # Create

    def base_dir(self) -> str:
        if self.config.worktree_root:
            root = os.path.expanduser(self.config.worktree_root)
            return os.path.normpath(os.path.join(self.cwd, root))
        return self.cwd

    def plan_create(
        self,
        branch: str,
        conflict_policy: Optional[ConflictPolicy] = None,
        path: Optional[str] = None,
        start_point: Optional[str] = None,
    ) -> OperationPlan:
        """Plan a worktree for ``branch`` against fresh snapshots.

        Raises:
            ValueError: empty branch name
            ConflictError: branch attached elsewhere and no policy given
            ProcessError: git could not list worktrees or branches
        """
        if not (branch or "").strip():
            raise ValueError("Branch name cannot be empty")
        records = self.registry.snapshot()
        planner = WorktreePlanner(records, self.catalog.snapshot(), self.base_dir())
        return planner.plan(branch, conflict_policy, path, start_point)

    @staticmethod
    def add_arguments(plan: OperationPlan) -> List[str]:
        """The `git worktree add` command line for a plan."""
        if plan.kind is PlanKind.ATTACH_EXISTING_LOCAL:
            return ["git", "worktree", "add", plan.path, plan.branch]
        if plan.kind is PlanKind.ATTACH_AS_REMOTE_TRACKING:
            return ["git", "worktree", "add", plan.path, "-b", plan.branch, plan.remote_ref]
        if plan.kind is PlanKind.CREATE_NEW_LOCAL:
            args = ["git", "worktree", "add", plan.path, "-b", plan.branch]
            if plan.start_point:
                args.append(plan.start_point)
            return args
        if plan.kind is PlanKind.CREATE_DETACHED:
            return ["git", "worktree", "add", "--detach", plan.path, plan.requested_branch]
        raise ValueError(f"Plan {plan.kind.value} has no git command")

    def execute_create(self, plan: OperationPlan, upstream: Optional[str] = None) -> CreateResult:
        """Run a plan. Failures are returned, not raised.

        Nothing else happens when `git worktree add` fails. After success,
        file copying and upstream setup may add warnings but never undo the
        new worktree.
        """
        if plan.is_abort:
            return CreateResult(error=CancelledError("create worktree"))

        result = self.runner.run(self.add_arguments(plan), cwd=self.cwd)
        if not result.ok:
            error = result.to_error("git worktree add")
            logger.error(f"Failed to create worktree at {plan.path}: {error}")
            return CreateResult(error=error)
        logger.info(f"Created worktree at {plan.path} ({plan.describe()})")

        created = CreateResult()
        created.copied_files, copy_errors = self.copy_files(plan.path)
        created.warnings.extend(copy_errors)

        upstream_ref = upstream or plan.remote_ref
        if upstream_ref:
            if plan.branch is None:
                created.warnings.append(
                    f"Cannot set upstream {upstream_ref}: worktree is detached"
                )
            else:
                ok, error = self.set_upstream(plan.path, upstream_ref)
                if not ok:
                    created.warnings.append(str(error))

        created.record = self._read_back(plan, created)
        return created

    def set_upstream(self, path: str, upstream: str) -> Tuple[bool, Optional[ProcessError]]:
        """Point the branch checked out at ``path`` at ``upstream``."""
        result = self._git("branch", "--set-upstream-to", upstream, cwd=path)
        if not result.ok:
            error = result.to_error("git branch --set-upstream-to")
            logger.warning(f"Could not set upstream {upstream} in {path}: {error}")
            return False, error
        logger.info(f"Set upstream of {path} to {upstream}")
        return True, None

    def _read_back(self, plan: OperationPlan, created: CreateResult) -> WorktreeRecord:
        try:
            record = next(
                (r for r in self.registry.snapshot() if same_path(r.path, plan.path)), None
            )
        except ParseError as e:
            created.warnings.append(str(e))
            record = None
        if record is None:
            branch_ref = f"refs/heads/{plan.branch}" if plan.branch else None
            record = WorktreeRecord(
                path=plan.path, branch_ref=branch_ref, is_detached=branch_ref is None
            )
        return record

    def copy_files(self, to_path: str) -> Tuple[List[str], List[str]]:
        """Copy the configured files from the active directory into ``to_path``.

        Returns:
            Tuple of (copied file names, error messages)
        """
        source_dir = Path(self.cwd)
        copied, errors = [], []
        for name in self.config.copy_files:
            src = source_dir / name
            if not src.is_file():
                continue
            dest = Path(to_path) / name
            try:
                dest.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(src, dest)
            except OSError as e:
                errors.append(f"Could not copy {name}: {e}")
                logger.warning(errors[-1])
                continue
            copied.append(name)
            logger.info(f"Copied {name} -> {dest}")
        return copied, errors

    # Switch

    def switch(self, path: str, branch: Optional[str] = None) -> SwitchResult:
        """Make ``path`` the active worktree and notify collaborators.

        Hook, callback and opener failures are collected in the result; none
        of them stop the switch.
        """
        if not os.path.isdir(path):
            missing = WorktreePickerError(f"Worktree directory does not exist: {path}")
            return SwitchResult(path, branch, error=missing)

        target = self.directory.change(path)
        switched = SwitchResult(target, branch)

        if is_real_branch(branch):
            switched.checked_out = self._ensure_branch_checked_out(target, branch)

        switched.hook_results = self.hooks.notify(target)
        for failed in switched.failed_hooks:
            logger.warning(f"Refresh hook '{failed.name}' failed: {failed.error}")

        if self.config.on_switch is not None:
            try:
                self.config.on_switch(target, branch)
            except Exception as e:
                switched.callback_error = e
                logger.warning(f"on_switch callback failed: {e}")

        switched.open_error = self.opener.open(target)
        if switched.open_error:
            logger.warning(f"Could not open {target}: {switched.open_error}")

        logger.info(f"Switched to worktree: {target} ({branch or 'detached'})")
        return switched

    def _ensure_branch_checked_out(self, path: str, branch: str) -> bool:
        if self._git("switch", branch, cwd=path).ok:
            return True
        # Older git has no `switch`
        result = self._git("checkout", branch, cwd=path)
        if not result.ok:
            logger.debug(f"Could not check out {branch} in {path}: {result.stderr}")
        return result.ok

    # Delete

    def delete(
        self,
        path: str,
        force: bool = False,
        branch: Optional[str] = None,
        branch_deletion: BranchDeletion = None,
    ) -> DeleteResult:
        """Remove the worktree at ``path`` and optionally its branch.

        Args:
            path: Worktree directory
            force: Pass --force to `git worktree remove`
            branch: Branch checked out in the worktree, if any
            branch_deletion: "yes", "force", "no"/None, or a callable taking the
                branch name and returning one of those; only consulted after
                the worktree is gone
        """
        if self.directory.is_current(path):
            logger.warning(f"Refusing to delete the current worktree: {path}")
            return DeleteResult(path, error=CurrentWorktreeError(path), branch=branch)

        args = ["git", "worktree", "remove"]
        if force:
            args.append("--force")
        args.append(path)

        result = self.runner.run(args, cwd=self.cwd)
        if not result.ok:
            error = result.to_error("git worktree remove")
            logger.error(f"Failed to delete worktree at {path}: {error}")
            return DeleteResult(path, error=error, branch=branch)
        logger.info(f"Deleted worktree: {path}")

        deleted = DeleteResult(path, removed=True, branch=branch)
        if not is_real_branch(branch) or branch_deletion is None:
            return deleted

        answer = branch_deletion(branch) if callable(branch_deletion) else branch_deletion
        if answer in (ANSWER_YES, ANSWER_FORCE):
            deleted.branch_deleted, deleted.branch_error = self.delete_branch(
                branch, force=answer == ANSWER_FORCE
            )
        return deleted

    def delete_branch(
        self, branch: str, force: bool = False
    ) -> Tuple[bool, Optional[ProcessError]]:
        """Delete a local branch with -d, or -D when forced."""
        result = self._git("branch", "-D" if force else "-d", branch)
        if not result.ok:
            error = result.to_error("git branch -D" if force else "git branch -d")
            logger.error(f"Failed to delete branch {branch}: {error}")
            return False, error
        logger.info(f"{'Force deleted' if force else 'Deleted'} branch: {branch}")
        return True, None
