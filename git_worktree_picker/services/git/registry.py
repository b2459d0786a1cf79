"""Worktree registry: parsing `git worktree list --porcelain`."""

import re
from typing import Dict, Iterable, List, Optional, Union

from git_worktree_picker.exceptions import ParseError
from git_worktree_picker.models.worktree import WorktreeRecord
from git_worktree_picker.logging_config import get_logger

logger = get_logger(__name__)

_KEY_VALUE = re.compile(r"^(\S+)\s+(.*)$")


def parse_registry(raw: Union[str, Iterable[str]]) -> List[WorktreeRecord]:
    """Parse porcelain output into one record per block.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name
        (blank line between worktrees)

    Blocks are flushed on a blank line and once more at end of input, since
    git does not guarantee a trailing blank line. Lines that are not
    ``key value`` pairs are kept as flags.
    """
    lines = raw.splitlines() if isinstance(raw, str) else list(raw)

    records: List[WorktreeRecord] = []
    attributes: Dict[str, str] = {}
    flags: List[str] = []

    def flush():
        if attributes or flags:
            records.append(_build_record(attributes, flags))
        attributes.clear()
        flags.clear()

    for line in lines:
        line = line.rstrip("\r")
        if not line.strip():
            flush()
            continue

        match = _KEY_VALUE.match(line)
        if match:
            attributes[match.group(1)] = match.group(2)
        else:
            flags.append(line.strip())
    flush()

    return records


def _build_record(attributes: Dict[str, str], flags: List[str]) -> WorktreeRecord:
    path = attributes.get("worktree")
    if not path:
        raise ParseError(f"worktree block without a path: {dict(attributes)} {flags}")

    flag_set = set(flags)
    return WorktreeRecord(
        path=path,
        head=attributes.get("HEAD"),
        branch_ref=attributes.get("branch"),
        is_bare="bare" in flag_set,
        is_detached="detached" in flag_set,
        # locked and prunable may carry a reason: "locked <reason>"
        is_locked="locked" in flag_set or "locked" in attributes,
        is_prunable="prunable" in flag_set or "prunable" in attributes,
        attributes=dict(attributes),
        flags=flag_set,
    )


class WorktreeRegistry:
    """Reads the current set of worktrees from git."""

    def __init__(self, runner, repo_path: Optional[str] = None):
        """Initialize the registry.

        Args:
            runner: ProcessRunner used to invoke git
            repo_path: Directory git runs in (None = current directory)
        """
        self.runner = runner
        self.repo_path = repo_path

    def snapshot(self) -> List[WorktreeRecord]:
        """Fetch and parse the worktree list. Never cached.

        Raises:
            ParseError: if git exits non-zero
        """
        result = self.runner.run(["git", "worktree", "list", "--porcelain"], cwd=self.repo_path)
        if not result.ok:
            raise ParseError(result.stderr, result.returncode)

        records = parse_registry(result.stdout_lines)
        logger.debug(f"Found {len(records)} worktrees")
        for record in records:
            logger.debug(f"  {record}")
        return records
