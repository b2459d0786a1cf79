"""Synchronous command execution for git-worktree-picker."""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import git

from git_worktree_picker.exceptions import ProcessError
from git_worktree_picker.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class ProcessResult:
    """Exit status and output lines of one command."""

    returncode: int
    stdout_lines: List[str] = field(default_factory=list)
    stderr_lines: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def stdout(self) -> str:
        return "\n".join(self.stdout_lines)

    @property
    def stderr(self) -> str:
        return "\n".join(self.stderr_lines)

    def to_error(self, operation: str) -> ProcessError:
        return ProcessError.from_lines(operation, self.stderr_lines, self.returncode)


class ProcessRunner:
    """Runs commands and reports their output without raising on failure."""

    def run(self, args: Sequence[str], cwd: Optional[str] = None) -> ProcessResult:
        """Run ``args`` in ``cwd`` (the current directory when None).

        A non-zero exit is returned, never raised. If the command cannot be
        started at all, the result has exit code 1 and the error text as its
        only stderr line.
        """
        command = [str(arg) for arg in args]
        logger.debug(f"Running {' '.join(command)} (cwd={cwd or '.'})")
        try:
            status, stdout, stderr = git.Git(cwd).execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
            )
        except (git.exc.GitCommandNotFound, OSError) as e:
            logger.debug(f"Could not start {command[0]}: {e}")
            return ProcessResult(1, [], [str(e)])

        result = ProcessResult(
            returncode=status if status is not None else 1,
            stdout_lines=_split_lines(stdout),
            stderr_lines=_split_lines(stderr),
        )
        if not result.ok:
            logger.debug(f"{' '.join(command)} exited {result.returncode}: {result.stderr}")
        return result


def _split_lines(output) -> List[str]:
    if output is None:
        return []
    if isinstance(output, bytes):
        output = output.decode("utf-8", errors="replace")
    return output.splitlines()
