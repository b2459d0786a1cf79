"""Working directory tracking at process, window and tab scope."""

import os
from typing import Optional

from git_worktree_picker.constants import CHDIR_MODES
from git_worktree_picker.logging_config import get_logger

logger = get_logger(__name__)


class DirectoryContext:
    """Changes and reports the active directory.

    ``process`` scope changes the real working directory. ``window`` and
    ``tab`` scopes only override the directory seen by this picker session;
    a window override wins over a tab override, which wins over the process
    directory.
    """

    def __init__(self, scope: str = "process"):
        if scope not in CHDIR_MODES:
            raise ValueError(f"scope must be one of {CHDIR_MODES}, got '{scope}'")
        self.scope = scope
        self._window_dir: Optional[str] = None
        self._tab_dir: Optional[str] = None

    def change(self, path: str) -> str:
        """Make ``path`` the active directory at the configured scope."""
        target = os.path.abspath(path)
        if self.scope == "process":
            os.chdir(target)
        elif self.scope == "window":
            self._window_dir = target
        else:
            self._tab_dir = target
        logger.debug(f"Changed {self.scope} directory to {target}")
        return target

    def current(self) -> str:
        return self._window_dir or self._tab_dir or os.getcwd()

    def is_current(self, path: str) -> bool:
        return same_path(path, self.current())


def same_path(a: str, b: str) -> bool:
    """Compare two paths after resolving symlinks and relative parts."""
    return os.path.realpath(os.path.abspath(a)) == os.path.realpath(os.path.abspath(b))
