"""Tests for logging configuration"""
import logging

import pytest

from git_worktree_picker.logging_config import (
    ColoredFormatter,
    get_log_file,
    get_logger,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_get_logger_strips_package_prefix():
    assert get_logger("git_worktree_picker.services.planner").name == "planner"
    assert get_logger("git_worktree_picker.services.git.registry").name == "git.registry"
    assert get_logger("git_worktree_picker.tui").name == "tui"


def test_log_file_override(monkeypatch, temp_dir):
    monkeypatch.setenv("GIT_WORKTREE_PICKER_LOG", str(temp_dir / "picker.log"))
    assert get_log_file() == temp_dir / "picker.log"


def test_console_only_by_default(restore_root_logger):
    setup_logging()
    handlers = restore_root_logger.handlers
    assert len(handlers) == 1
    assert not isinstance(handlers[0], logging.FileHandler)
    assert handlers[0].level == logging.WARNING


def test_tui_mode_logs_only_to_file(restore_root_logger, temp_dir):
    log_file = temp_dir / "logs" / "picker.log"
    setup_logging(tui_mode=True, log_file=log_file)

    handlers = restore_root_logger.handlers
    assert [type(handler) for handler in handlers] == [logging.FileHandler]
    assert restore_root_logger.level == logging.DEBUG

    get_logger("git_worktree_picker.core.worktree_picker").debug("hello from the picker")
    handlers[0].flush()
    assert "hello from the picker" in log_file.read_text()


def test_debug_logs_to_file_and_console(restore_root_logger, temp_dir):
    setup_logging(debug=True, log_file=temp_dir / "picker.log")
    assert len(restore_root_logger.handlers) == 2
    assert logging.getLogger("git.cmd").level == logging.INFO


def test_colored_formatter_leaves_record_plain():
    formatter = ColoredFormatter(fmt="%(levelname)s %(message)s", use_color=True)
    record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)

    assert formatter.format(record) == "\033[31mERROR\033[0m boom"
    assert record.levelname == "ERROR"
