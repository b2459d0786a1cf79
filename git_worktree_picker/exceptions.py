"""Custom exceptions for git-worktree-picker"""

from typing import Optional, Sequence


class WorktreePickerError(Exception):
    """Base exception for all git-worktree-picker errors."""
    pass


class ProcessError(WorktreePickerError):
    """Exception raised when a git command exits with a non-zero status."""

    def __init__(
        self,
        operation: str,
        stderr: Optional[str] = None,
        returncode: Optional[int] = None,
    ):
        self.operation = operation
        self.stderr = (stderr or "").strip()
        self.returncode = returncode

        error_msg = f"{operation} failed"
        if returncode is not None:
            error_msg += f" (exit {returncode})"
        if self.stderr:
            error_msg += f": {self.stderr}"

        super().__init__(error_msg)

    @classmethod
    def from_lines(
        cls, operation: str, stderr_lines: Sequence[str], returncode: Optional[int] = None
    ) -> "ProcessError":
        """Build an error from the stderr lines reported by the process runner."""
        return cls(operation, "\n".join(stderr_lines), returncode)


class ParseError(ProcessError):
    """Exception raised when the worktree registry cannot be read."""

    def __init__(self, message: Optional[str] = None, returncode: Optional[int] = None):
        super().__init__("git worktree list", message, returncode)


class CurrentWorktreeError(WorktreePickerError):
    """Exception raised when attempting to delete the worktree in use."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Refusing to delete the current worktree: {path}")


class ConflictError(WorktreePickerError):
    """Exception raised when a branch is already checked out in another worktree."""

    def __init__(self, branch: str, attached_path: Optional[str] = None):
        self.branch = branch
        self.attached_path = attached_path

        error_msg = f"Branch '{branch}' is already checked out"
        if attached_path:
            error_msg += f" at {attached_path}"

        super().__init__(error_msg)


class CancelledError(WorktreePickerError):
    """Raised when the user declines a prompt. Not reported as a failure."""

    def __init__(self, action: Optional[str] = None):
        self.action = action
        super().__init__(f"{action} cancelled" if action else "Cancelled")
