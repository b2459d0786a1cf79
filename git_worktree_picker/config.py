"""Configuration handling for git-worktree-picker"""

from dataclasses import dataclass, field, fields, replace
from typing import Callable, List, Optional

import git

from git_worktree_picker.constants import (
    CHDIR_MODES,
    DEFAULT_COPY_FILES,
    DEFAULT_REMOTE,
    GIT_CONFIG_SECTION,
    OPEN_AFTER_MODES,
)
from git_worktree_picker.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class Config:
    """Configuration for git-worktree-picker with validation."""

    # Where the directory change applies: process, window or tab
    chdir_mode: str = "tab"
    # What to open after switching: none, file-manager, editor
    open_after: str = "none"
    # Files copied from the current directory into every new worktree
    copy_files: List[str] = field(default_factory=lambda: list(DEFAULT_COPY_FILES))
    # Called as on_switch(path, branch) after every switch
    on_switch: Optional[Callable[[str, str], None]] = None

    # Remote probed first when looking up remote branches
    remote_name: str = DEFAULT_REMOTE
    # Base directory for relative worktree paths (None = current directory)
    worktree_root: Optional[str] = None

    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_chdir_mode()
        self._validate_open_after()
        self._validate_copy_files()
        self._validate_on_switch()
        self._validate_remote_name()

    def _validate_chdir_mode(self):
        """Validate chdir_mode is one of allowed values."""
        if self.chdir_mode not in CHDIR_MODES:
            raise ValueError(f"chdir_mode must be one of {CHDIR_MODES}, got '{self.chdir_mode}'")

    def _validate_open_after(self):
        """Validate open_after is one of allowed values."""
        if self.open_after not in OPEN_AFTER_MODES:
            raise ValueError(
                f"open_after must be one of {OPEN_AFTER_MODES}, got '{self.open_after}'"
            )

    def _validate_copy_files(self):
        if isinstance(self.copy_files, str) or not isinstance(self.copy_files, (list, tuple)):
            raise ValueError("copy_files must be a list")
        self.copy_files = [name for name in self.copy_files if name]

    def _validate_on_switch(self):
        if self.on_switch is not None and not callable(self.on_switch):
            raise ValueError("on_switch must be callable")

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    def merged(self, overrides: Optional[dict] = None) -> "Config":
        """Return a copy with the non-None values of ``overrides`` applied."""
        known = {f.name for f in fields(self)}
        changes = {k: v for k, v in (overrides or {}).items() if k in known and v is not None}
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)

    @classmethod
    def from_git_config(cls, repo_path: str) -> "Config":
        """Create Config from the ``[worktree-picker]`` section of git config.

        Recognized keys: chdir-mode, open-after, copy-files (multi-valued),
        remote, worktree-root. Missing keys keep their defaults.
        """
        values: dict = {}
        try:
            repo = git.Repo(repo_path, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            logger.debug(f"No repository at {repo_path}, using default config: {e}")
            return cls()

        try:
            reader = repo.config_reader()
            if reader.has_section(GIT_CONFIG_SECTION):
                simple_keys = {
                    "chdir-mode": "chdir_mode",
                    "open-after": "open_after",
                    "remote": "remote_name",
                    "worktree-root": "worktree_root",
                }
                for option, attr in simple_keys.items():
                    if reader.has_option(GIT_CONFIG_SECTION, option):
                        values[attr] = str(reader.get_value(GIT_CONFIG_SECTION, option))
                if reader.has_option(GIT_CONFIG_SECTION, "copy-files"):
                    values["copy_files"] = [
                        str(v) for v in reader.get_values(GIT_CONFIG_SECTION, "copy-files")
                    ]
        finally:
            repo.close()

        logger.debug(f"Loaded git config values: {values}")
        return cls.from_dict(values)
