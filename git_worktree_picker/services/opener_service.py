"""Opens a worktree in a file manager or editor after switching."""

import os
import subprocess
import sys
from typing import List, Mapping, Optional

from git_worktree_picker.exceptions import ProcessError
from git_worktree_picker.logging_config import get_logger

logger = get_logger(__name__)


def build_open_command(
    mode: str,
    path: str,
    platform: str = sys.platform,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[List[str]]:
    """Command that opens ``path`` for the given ``open_after`` mode, or None."""
    environ = os.environ if environ is None else environ
    if mode == "file-manager":
        if platform == "darwin":
            return ["open", path]
        if platform.startswith("win"):
            return ["explorer", path]
        return ["xdg-open", path]
    if mode == "editor":
        editor = environ.get("VISUAL") or environ.get("EDITOR") or "vi"
        return [*editor.split(), path]
    return None


class OpenerService:
    """Runs the configured post-switch open action."""

    def __init__(self, mode: str = "none"):
        self.mode = mode

    @property
    def is_interactive(self) -> bool:
        """True when the action takes over the terminal."""
        return self.mode == "editor"

    def open(self, path: str) -> Optional[ProcessError]:
        """Open ``path``. Returns the error instead of raising it."""
        command = build_open_command(self.mode, path)
        if command is None:
            return None

        logger.debug(f"Opening {path} with {' '.join(command)}")
        try:
            if self.is_interactive:
                returncode = subprocess.call(command, cwd=path)
                if returncode != 0:
                    return ProcessError(
                        " ".join(command), f"exited with status {returncode}", returncode
                    )
            else:
                subprocess.Popen(
                    command,
                    cwd=path,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                    start_new_session=True,
                )
        except OSError as e:
            return ProcessError(" ".join(command), str(e))
        return None
