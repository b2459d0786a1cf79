"""
git-worktree-picker - Pick, create, switch and delete git worktrees
"""

from .__version__ import __version__
from .core import WorktreePicker
from .cli.main import main

__all__ = ["WorktreePicker", "main", "__version__"]
