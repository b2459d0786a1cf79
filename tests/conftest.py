"""Pytest fixtures for git-worktree-picker tests"""
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import git
import pytest

from git_worktree_picker.config import Config
from git_worktree_picker.core import WorktreePicker
from git_worktree_picker.services.directory_service import DirectoryContext
from git_worktree_picker.services.git import ProcessResult


class FakeRunner:
    """Process runner that records calls and replays scripted results."""

    def __init__(self):
        self.calls: List[Tuple[List[str], Optional[str]]] = []
        self.responses: Dict[Tuple[str, ...], ProcessResult] = {}

    def add(
        self, args: Sequence[str], returncode: int = 0, stdout: str = "", stderr: str = ""
    ) -> None:
        self.responses[tuple(args)] = ProcessResult(
            returncode, stdout.splitlines(), stderr.splitlines()
        )

    def run(self, args: Sequence[str], cwd: Optional[str] = None) -> ProcessResult:
        self.calls.append((list(args), cwd))
        return self.responses.get(tuple(args), ProcessResult(0))

    @property
    def commands(self) -> List[List[str]]:
        return [args for args, _ in self.calls]


WORKTREE_LIST = ["git", "worktree", "list", "--porcelain"]
LOCAL_BRANCHES = ["git", "for-each-ref", "--format=%(refname:short)", "refs/heads"]
REMOTE_BRANCHES = ["git", "for-each-ref", "--format=%(refname:short)", "refs/remotes"]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        # git reports resolved paths (macOS /var -> /private/var)
        yield Path(tmpdir).resolve()


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def test_config():
    """Configuration without copy files or post-switch actions."""
    return Config(chdir_mode="tab", copy_files=[], worktree_root="../worktrees")


@pytest.fixture
def fake_picker(fake_runner, test_config, temp_dir):
    """WorktreePicker over a scripted runner, active directory temp_dir/main."""
    main_dir = temp_dir / "main"
    main_dir.mkdir()
    directory = DirectoryContext("tab")
    directory.change(str(main_dir))
    return WorktreePicker(test_config, runner=fake_runner, directory=directory)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    # Create initial commit on main branch
    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    repo.git.branch("-M", "main")

    repo.create_remote("origin", "git@example.com:test/test-repo.git")

    yield repo

    # Cleanup
    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Repository with a local branch and remote-tracking refs (no network).

    Local: main, dev. Remote: origin/main, origin/feature-y, upstream/only-upstream.
    """
    repo = git_repo
    repo.git.branch("dev")
    head = repo.head.commit.hexsha
    repo.git.update_ref("refs/remotes/origin/main", head)
    repo.git.update_ref("refs/remotes/origin/feature-y", head)
    repo.git.update_ref("refs/remotes/upstream/only-upstream", head)
    yield repo


@pytest.fixture
def repo_picker(git_repo_with_branches, test_config):
    """WorktreePicker running real git in the test repository."""
    directory = DirectoryContext("tab")
    directory.change(git_repo_with_branches.working_dir)
    return WorktreePicker(test_config, directory=directory)
