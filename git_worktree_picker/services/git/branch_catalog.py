"""Branch catalog: local and remote branch names."""

from typing import List, Optional, Sequence, Tuple

from git_worktree_picker.constants import DEFAULT_REMOTE, HEADS_PREFIX, REMOTES_PREFIX
from git_worktree_picker.models.branch import (
    BranchCatalogEntry,
    BranchOrigin,
    CatalogSnapshot,
    strip_remote_prefix,
)
from git_worktree_picker.models.worktree import WorktreeRecord
from git_worktree_picker.logging_config import get_logger

logger = get_logger(__name__)


def is_branch_attached(
    records: Sequence[WorktreeRecord], branch_name: str
) -> Tuple[bool, Optional[str]]:
    """Check whether ``branch_name`` is checked out in any worktree.

    Returns:
        Tuple of (attached, path). path is None when not attached.
    """
    for record in records:
        if record.has_branch and record.branch_name == branch_name:
            return True, record.path
    return False, None


def _is_remote_alias(ref: str) -> bool:
    # "origin/HEAD -> origin/main" rows, "origin/HEAD", and newer git's bare "origin"
    return "->" in ref or ref.endswith("/HEAD") or "/" not in ref


class BranchCatalog:
    """Service for querying branch names.

    Planning works on ``snapshot()``, which answers the same two-tier remote
    lookup from one listing. ``local_branch_exists``, ``find_remote_branch``
    and ``branch_exists_remote`` query git directly with ``show-ref`` for
    callers that hold no snapshot, such as hooks reaching ``picker.catalog``.
    """

    def __init__(self, runner, repo_path: Optional[str] = None, remote_name: str = DEFAULT_REMOTE):
        """Initialize the branch catalog.

        Args:
            runner: ProcessRunner used to invoke git
            repo_path: Directory git runs in (None = current directory)
            remote_name: Remote probed first when looking up remote branches
        """
        self.runner = runner
        self.repo_path = repo_path
        self.remote_name = remote_name

    def _for_each_ref(self, namespace: str) -> List[str]:
        result = self.runner.run(
            ["git", "for-each-ref", "--format=%(refname:short)", namespace], cwd=self.repo_path
        )
        if not result.ok:
            raise result.to_error(f"git for-each-ref {namespace}")
        return [line.strip() for line in result.stdout_lines if line.strip()]

    def _show_ref(self, ref: str) -> bool:
        result = self.runner.run(
            ["git", "show-ref", "--verify", "--quiet", ref], cwd=self.repo_path
        )
        return result.ok

    def list_local_branches(self) -> List[str]:
        """Names of all local branches."""
        return self._for_each_ref(HEADS_PREFIX.rstrip("/"))

    def list_remote_refs(self) -> List[str]:
        """Remote-tracking refs as ``<remote>/<name>``, without HEAD aliases."""
        return [
            ref for ref in self._for_each_ref(REMOTES_PREFIX.rstrip("/"))
            if not _is_remote_alias(ref)
        ]

    def list_entries(self) -> List[BranchCatalogEntry]:
        """One entry per branch name; a local branch hides remotes of the same name."""
        entries = {
            name: BranchCatalogEntry(name, BranchOrigin.LOCAL)
            for name in self.list_local_branches()
        }
        for ref in self.list_remote_refs():
            name = strip_remote_prefix(ref)
            if name not in entries:
                entries[name] = BranchCatalogEntry(name, BranchOrigin.REMOTE_TRACKING, ref)
        return [entries[name] for name in sorted(entries)]

    def list_all_branch_names(self) -> List[str]:
        """Sorted, deduplicated local and remote branch names."""
        return [entry.name for entry in self.list_entries()]

    def list_available_branch_names(self, records: Sequence[WorktreeRecord]) -> List[str]:
        """Branch names not checked out in any worktree."""
        attached = {record.branch_name for record in records if record.has_branch}
        return [name for name in self.list_all_branch_names() if name not in attached]

    def local_branch_exists(self, branch_name: str) -> bool:
        """Live ``show-ref`` check for a local branch."""
        return self._show_ref(f"{HEADS_PREFIX}{branch_name}")

    def find_remote_branch(self, branch_name: str) -> Optional[str]:
        """Find the remote ref for ``branch_name``.

        Probes ``<remote_name>/<branch>`` directly first. Only when that fails
        are all remote refs scanned; the first one ending in ``/<branch>`` wins.
        """
        conventional = f"{self.remote_name}/{branch_name}"
        if self._show_ref(f"{REMOTES_PREFIX}{conventional}"):
            return conventional

        suffix = f"/{branch_name}"
        match = next((ref for ref in self.list_remote_refs() if ref.endswith(suffix)), None)
        if match:
            logger.debug(f"Resolved {branch_name} to {match} by suffix match")
        return match

    def branch_exists_remote(self, branch_name: str) -> bool:
        return self.find_remote_branch(branch_name) is not None

    def snapshot(self) -> CatalogSnapshot:
        """Capture local branches and remote refs for the planner."""
        return CatalogSnapshot(
            local_branches=frozenset(self.list_local_branches()),
            remote_refs=tuple(self.list_remote_refs()),
            remote_name=self.remote_name,
        )
