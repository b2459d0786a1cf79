"""Branch catalog models"""
from enum import Enum
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple


class BranchOrigin(Enum):
    """Where a branch name was found."""
    LOCAL = "local"
    REMOTE_TRACKING = "remote-tracking"


@dataclass(frozen=True)
class BranchCatalogEntry:
    """A branch name with its origin."""
    name: str
    origin: BranchOrigin
    remote_ref: Optional[str] = None  # origin/<name> for remote-tracking entries


def strip_remote_prefix(ref: str) -> str:
    """Drop the leading ``<remote>/`` segment of a remote-tracking ref."""
    _, sep, rest = ref.partition("/")
    return rest if sep else ref


@dataclass(frozen=True)
class CatalogSnapshot:
    """Branches known at one instant. Lookups never touch git."""
    local_branches: FrozenSet[str] = field(default_factory=frozenset)
    remote_refs: Tuple[str, ...] = ()
    remote_name: str = "origin"

    def has_local(self, name: str) -> bool:
        return name in self.local_branches

    def resolve_remote_ref(self, name: str) -> Optional[str]:
        """Find the remote ref for ``name``.

        The conventional ``<remote_name>/<name>`` ref is checked first; otherwise
        the first remote ref ending in ``/<name>`` wins.
        """
        conventional = f"{self.remote_name}/{name}"
        if conventional in self.remote_refs:
            return conventional
        suffix = f"/{name}"
        return next((ref for ref in self.remote_refs if ref.endswith(suffix)), None)
