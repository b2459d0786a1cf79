"""Logging configuration for git-worktree-picker"""
import logging
import os
import sys
from pathlib import Path
from typing import Optional

LOG_FILE_ENV = 'GIT_WORKTREE_PICKER_LOG'

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEBUG_FORMAT = FILE_FORMAT
SHORT_FORMAT = '[%(name)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# GitPython logs every command it spawns at DEBUG
NOISY_LOGGERS = ('git.cmd', 'git.util', 'asyncio')


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the level name when stderr is a terminal."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, fmt=None, datefmt=None, use_color: Optional[bool] = None):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = sys.stderr.isatty() if use_color is None else use_color

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if not (self.use_color and color):
            return super().format(record)
        # Colour a copy so other handlers see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def get_log_file() -> Path:
    """Location of the log file written in TUI and debug mode.

    ``$GIT_WORKTREE_PICKER_LOG`` overrides the default under the home directory.
    """
    override = os.environ.get(LOG_FILE_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / '.git-worktree-picker' / 'git-worktree-picker.log'


def _file_handler(log_file: Path) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode='w')  # Overwrite each run
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _console_handler(level: int, debug: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if debug:
        handler.setFormatter(ColoredFormatter(fmt=DEBUG_FORMAT, datefmt=DATE_FORMAT))
    else:
        handler.setFormatter(ColoredFormatter(fmt=SHORT_FORMAT))
    return handler


def setup_logging(
    verbose: bool = False,
    debug: bool = False,
    tui_mode: bool = False,
    log_file: Optional[Path] = None,
) -> None:
    """
    Configure logging for the application.

    Console output goes to stderr so stdout stays clean for ``--print-path``.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages and detailed formatting
        tui_mode: If True, log only to file (the TUI owns the terminal)
        log_file: File used in TUI and debug mode (default: get_log_file())
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    # The file handler wants everything in TUI mode; handlers filter further
    root_logger.setLevel(logging.DEBUG if tui_mode else level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if tui_mode or debug:
        root_logger.addHandler(_file_handler(log_file or get_log_file()))

    if not tui_mode:
        root_logger.addHandler(_console_handler(level, debug))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO if debug else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance
    """
    # Strip the package prefix for cleaner log names
    if name.startswith('git_worktree_picker.'):
        name = name[len('git_worktree_picker.'):]
    if name.startswith('services.'):
        name = name[len('services.'):]

    return logging.getLogger(name)
