"""Planning models: what to do with a requested branch."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PlanKind(Enum):
    """The git operation chosen for a requested branch."""
    ATTACH_EXISTING_LOCAL = "attach-existing-local"
    ATTACH_AS_REMOTE_TRACKING = "attach-as-remote-tracking"
    CREATE_NEW_LOCAL = "create-new-local"
    CREATE_DETACHED = "create-detached"
    ABORT = "abort"


class ConflictResolution(Enum):
    """Answer to "this branch is already checked out elsewhere"."""
    DETACH = "detach"
    CANCEL = "cancel"
    RENAME = "rename"


@dataclass(frozen=True)
class ConflictPolicy:
    """How to resolve a branch that is already attached to a worktree."""
    resolution: ConflictResolution
    new_name: Optional[str] = None

    def __post_init__(self):
        if self.resolution is ConflictResolution.RENAME and not (self.new_name or "").strip():
            raise ValueError("rename policy requires a new branch name")

    @classmethod
    def detach(cls) -> "ConflictPolicy":
        return cls(ConflictResolution.DETACH)

    @classmethod
    def cancel(cls) -> "ConflictPolicy":
        return cls(ConflictResolution.CANCEL)

    @classmethod
    def rename(cls, new_name: str) -> "ConflictPolicy":
        return cls(ConflictResolution.RENAME, new_name.strip())

    @classmethod
    def parse(cls, text: str) -> "ConflictPolicy":
        """Parse ``detach``, ``cancel`` or ``rename:<name>``."""
        value = text.strip()
        if value == ConflictResolution.DETACH.value:
            return cls.detach()
        if value == ConflictResolution.CANCEL.value:
            return cls.cancel()
        if value.startswith(f"{ConflictResolution.RENAME.value}:"):
            return cls.rename(value.split(":", 1)[1])
        raise ValueError(
            f"Unknown conflict policy '{text}' (expected detach, cancel or rename:<name>)"
        )


@dataclass(frozen=True)
class OperationPlan:
    """The decided action for a requested branch."""
    kind: PlanKind
    requested_branch: str
    branch: Optional[str]  # None for abort; the resolved name otherwise
    path: str
    remote_ref: Optional[str] = None
    start_point: Optional[str] = None
    attached_path: Optional[str] = None

    @property
    def is_abort(self) -> bool:
        return self.kind is PlanKind.ABORT

    @property
    def was_renamed(self) -> bool:
        return self.branch is not None and self.branch != self.requested_branch

    def describe(self) -> str:
        """Short human description used in notifications."""
        if self.kind is PlanKind.ATTACH_EXISTING_LOCAL:
            return f"branch {self.branch}"
        if self.kind is PlanKind.ATTACH_AS_REMOTE_TRACKING:
            return f"branch {self.branch} tracking {self.remote_ref}"
        if self.kind is PlanKind.CREATE_NEW_LOCAL:
            return f"new branch {self.branch}"
        if self.kind is PlanKind.CREATE_DETACHED:
            return f"detached at {self.requested_branch}"
        return "nothing (aborted)"
