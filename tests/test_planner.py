"""Tests for the worktree operation planner"""
import pytest

from git_worktree_picker.exceptions import ConflictError
from git_worktree_picker.models.branch import CatalogSnapshot
from git_worktree_picker.models.plan import ConflictPolicy, ConflictResolution, PlanKind
from git_worktree_picker.services.git import parse_registry
from git_worktree_picker.services.planner import WorktreePlanner


RECORDS = parse_registry(
    "worktree /repo\nHEAD abc1234\nbranch refs/heads/main\n\n"
    "worktree /other-wt\nHEAD def5678\nbranch refs/heads/dev\n"
)
UNATTACHED = parse_registry("worktree /repo\nHEAD abc1234\nbranch refs/heads/main\n")
CATALOG = CatalogSnapshot(
    local_branches=frozenset({"main", "dev"}),
    remote_refs=("origin/main", "origin/feature-y"),
)


@pytest.fixture
def planner():
    return WorktreePlanner(RECORDS, CATALOG, "/repo")


class TestPlanKinds:
    """Test local, remote and new branch precedence."""

    def test_existing_local_branch(self):
        plan = WorktreePlanner(UNATTACHED, CATALOG, "/repo").plan("dev", ConflictPolicy.cancel())

        assert plan.kind is PlanKind.ATTACH_EXISTING_LOCAL
        assert plan.branch == "dev"
        assert plan.path == "/repo/dev"

    def test_remote_only_branch(self, planner):
        plan = planner.plan("feature-y", ConflictPolicy.cancel())

        assert plan.kind is PlanKind.ATTACH_AS_REMOTE_TRACKING
        assert plan.branch == "feature-y"
        assert plan.remote_ref == "origin/feature-y"

    def test_local_wins_over_remote(self):
        catalog = CatalogSnapshot(
            local_branches=frozenset({"shared"}), remote_refs=("origin/shared",)
        )
        plan = WorktreePlanner([], catalog, "/repo").plan("shared")
        assert plan.kind is PlanKind.ATTACH_EXISTING_LOCAL
        assert plan.remote_ref is None

    def test_new_branch(self, planner):
        plan = planner.plan("brand-new")
        assert plan.kind is PlanKind.CREATE_NEW_LOCAL
        assert plan.start_point is None

    def test_new_branch_with_start_point(self, planner):
        plan = planner.plan("brand-new", start_point="v1.0")
        assert plan.start_point == "v1.0"

    def test_remote_suffix_match(self):
        catalog = CatalogSnapshot(remote_refs=("upstream/only-upstream",))
        plan = WorktreePlanner([], catalog, "/repo").plan("only-upstream")
        assert plan.remote_ref == "upstream/only-upstream"

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_branch_name(self, planner, name):
        with pytest.raises(ValueError):
            planner.plan(name)

    def test_branch_name_is_stripped(self, planner):
        assert planner.plan("  dev2  ").branch == "dev2"


class TestPlanPaths:
    """Test target path resolution."""

    def test_explicit_relative_path(self, planner):
        assert planner.plan("brand-new", path="../wt/new").path == "/wt/new"

    def test_explicit_absolute_path(self, planner):
        assert planner.plan("brand-new", path="/tmp/x").path == "/tmp/x"

    def test_branch_with_slash(self, planner):
        assert planner.plan("feature/login").path == "/repo/feature/login"


class TestConflicts:
    """Test a requested branch that is checked out elsewhere."""

    def test_no_policy_raises(self, planner):
        with pytest.raises(ConflictError) as exc_info:
            planner.plan("dev")
        assert exc_info.value.branch == "dev"
        assert exc_info.value.attached_path == "/other-wt"

    def test_cancel_aborts(self, planner):
        plan = planner.plan("dev", ConflictPolicy.cancel())
        assert plan.kind is PlanKind.ABORT
        assert plan.is_abort
        assert plan.attached_path == "/other-wt"

    def test_detach(self, planner):
        plan = planner.plan("dev", ConflictPolicy.detach())
        assert plan.kind is PlanKind.CREATE_DETACHED
        assert plan.branch is None
        assert plan.requested_branch == "dev"
        assert plan.path == "/repo/dev"

    def test_rename_to_new_branch(self, planner):
        plan = planner.plan("dev", ConflictPolicy.rename("dev-2"))
        assert plan.kind is PlanKind.CREATE_NEW_LOCAL
        assert plan.branch == "dev-2"
        assert plan.requested_branch == "dev"
        assert plan.was_renamed
        assert plan.path == "/repo/dev-2"
        # The new branch starts where the requested one is
        assert plan.start_point == "dev"

    def test_rename_to_remote_branch(self, planner):
        plan = planner.plan("dev", ConflictPolicy.rename("feature-y"))
        assert plan.kind is PlanKind.ATTACH_AS_REMOTE_TRACKING
        assert plan.remote_ref == "origin/feature-y"

    def test_rename_to_attached_branch_raises(self, planner):
        with pytest.raises(ConflictError) as exc_info:
            planner.plan("dev", ConflictPolicy.rename("main"))
        assert exc_info.value.attached_path == "/repo"

    def test_policy_ignored_without_conflict(self, planner):
        plan = planner.plan("brand-new", ConflictPolicy.detach())
        assert plan.kind is PlanKind.CREATE_NEW_LOCAL


class TestConflictAtDefaultPath:
    """Test conflicts where the branch already lives at its default directory."""

    @pytest.fixture
    def planner(self):
        records = parse_registry(
            "worktree /repo\nHEAD abc1234\nbranch refs/heads/main\n\n"
            "worktree /repo/dev\nHEAD def5678\nbranch refs/heads/dev\n"
        )
        return WorktreePlanner(records, CATALOG, "/repo")

    def test_detach_picks_another_directory(self, planner):
        plan = planner.plan("dev", ConflictPolicy.detach())
        assert plan.kind is PlanKind.CREATE_DETACHED
        assert plan.attached_path == "/repo/dev"
        assert plan.path == "/repo/dev-detached"

    def test_detach_keeps_a_free_explicit_path(self, planner):
        plan = planner.plan("dev", ConflictPolicy.detach(), path="scratch")
        assert plan.path == "/repo/scratch"

    def test_rename_uses_new_name_for_occupied_path(self, planner):
        plan = planner.plan("dev", ConflictPolicy.rename("dev-2"), path="dev")
        assert plan.branch == "dev-2"
        assert plan.path == "/repo/dev-2"

    def test_rename_keeps_a_free_explicit_path(self, planner):
        plan = planner.plan("dev", ConflictPolicy.rename("dev-2"), path="scratch")
        assert plan.path == "/repo/scratch"


class TestConflictPolicy:
    """Test parsing of --on-conflict values."""

    def test_parse(self):
        assert ConflictPolicy.parse("detach").resolution is ConflictResolution.DETACH
        assert ConflictPolicy.parse("cancel").resolution is ConflictResolution.CANCEL
        policy = ConflictPolicy.parse("rename:dev-2")
        assert policy.resolution is ConflictResolution.RENAME
        assert policy.new_name == "dev-2"

    @pytest.mark.parametrize("text", ["", "keep", "rename", "rename:"])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError):
            ConflictPolicy.parse(text)


def test_plan_is_deterministic_for_a_snapshot():
    first = WorktreePlanner(RECORDS, CATALOG, "/repo")
    second = WorktreePlanner(RECORDS, CATALOG, "/repo")
    for name in ["dev", "main", "feature-y", "brand-new"]:
        policy = ConflictPolicy.detach()
        assert first.plan(name, policy) == second.plan(name, policy)
        assert first.plan(name, policy) == first.plan(name, policy)
