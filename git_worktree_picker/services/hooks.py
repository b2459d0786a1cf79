"""Registry of optional refresh hooks called after a worktree switch."""

from importlib.metadata import entry_points
from typing import Callable, Dict, List, Optional

from git_worktree_picker.constants import REFRESH_HOOKS_GROUP
from git_worktree_picker.models.results import HookResult
from git_worktree_picker.logging_config import get_logger

logger = get_logger(__name__)

RefreshHook = Callable[[str], None]


class HookRegistry:
    """Named refresh callbacks, each of which may be absent.

    A hook registered as None stands for a collaborator that is not installed;
    notify() skips it. A hook that raises is reported in its HookResult and
    does not prevent the remaining hooks from running.
    """

    def __init__(self, hooks: Optional[Dict[str, Optional[RefreshHook]]] = None):
        self._hooks: Dict[str, Optional[RefreshHook]] = dict(hooks or {})

    def register(self, name: str, hook: Optional[RefreshHook]) -> None:
        self._hooks[name] = hook

    def unregister(self, name: str) -> None:
        self._hooks.pop(name, None)

    def __contains__(self, name: str) -> bool:
        return self._hooks.get(name) is not None

    def __len__(self) -> int:
        return sum(1 for hook in self._hooks.values() if hook is not None)

    def notify(self, path: str) -> List[HookResult]:
        """Call every present hook with ``path``."""
        results = []
        for name, hook in list(self._hooks.items()):
            if hook is None:
                continue
            try:
                hook(path)
                results.append(HookResult(name, True))
            except Exception as e:
                results.append(HookResult(name, False, e))
        return results

    @classmethod
    def from_entry_points(cls, group: str = REFRESH_HOOKS_GROUP) -> "HookRegistry":
        """Build a registry from installed ``git_worktree_picker.refresh_hooks`` plugins."""
        registry = cls()
        for ep in entry_points(group=group):
            try:
                registry.register(ep.name, ep.load())
            except Exception as e:
                logger.warning(f"Could not load refresh hook '{ep.name}': {e}")
                registry.register(ep.name, None)
        return registry
