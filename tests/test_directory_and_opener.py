"""Tests for directory scopes and the post-switch opener"""
import os
from unittest.mock import patch

import pytest

from git_worktree_picker.exceptions import ProcessError
from git_worktree_picker.services.directory_service import DirectoryContext, same_path
from git_worktree_picker.services.opener_service import OpenerService, build_open_command


class TestDirectoryContext:
    """Test process, window and tab scopes."""

    def test_process_scope_changes_cwd(self, temp_dir):
        before = os.getcwd()
        try:
            context = DirectoryContext("process")
            assert context.change(str(temp_dir)) == str(temp_dir)
            assert same_path(os.getcwd(), str(temp_dir))
            assert context.is_current(str(temp_dir))
        finally:
            os.chdir(before)

    @pytest.mark.parametrize("scope", ["window", "tab"])
    def test_scoped_change_leaves_cwd(self, temp_dir, scope):
        before = os.getcwd()
        context = DirectoryContext(scope)
        context.change(str(temp_dir))

        assert os.getcwd() == before
        assert context.current() == str(temp_dir)

    def test_window_wins_over_tab(self, temp_dir):
        window = temp_dir / "window"
        tab = temp_dir / "tab"
        context = DirectoryContext("tab")
        context.change(str(tab))
        context.scope = "window"
        context.change(str(window))

        assert context.current() == str(window)

    def test_default_is_process_directory(self):
        assert DirectoryContext("tab").current() == os.getcwd()

    def test_invalid_scope(self):
        with pytest.raises(ValueError):
            DirectoryContext("global")

    def test_same_path_resolves_symlinks(self, temp_dir):
        real = temp_dir / "real"
        real.mkdir()
        link = temp_dir / "link"
        link.symlink_to(real)

        assert same_path(str(link), str(real))
        assert same_path(str(real / ".." / "real"), str(real))
        assert not same_path(str(real), str(temp_dir))


class TestBuildOpenCommand:
    """Test the command line chosen for each open_after mode."""

    def test_none(self):
        assert build_open_command("none", "/wt") is None

    @pytest.mark.parametrize(
        "platform,expected",
        [("darwin", "open"), ("linux", "xdg-open"), ("win32", "explorer")],
    )
    def test_file_manager(self, platform, expected):
        assert build_open_command("file-manager", "/wt", platform=platform) == [expected, "/wt"]

    def test_editor_prefers_visual(self):
        environ = {"VISUAL": "code --wait", "EDITOR": "nano"}
        assert build_open_command("editor", "/wt", environ=environ) == ["code", "--wait", "/wt"]

    def test_editor_fallback(self):
        assert build_open_command("editor", "/wt", environ={"EDITOR": "nano"}) == ["nano", "/wt"]
        assert build_open_command("editor", "/wt", environ={}) == ["vi", "/wt"]


class TestOpenerService:
    """Test running the opener."""

    def test_none_does_nothing(self):
        with patch("subprocess.Popen") as mock_popen:
            assert OpenerService("none").open("/wt") is None
        mock_popen.assert_not_called()

    def test_file_manager_is_detached(self, temp_dir):
        with patch("subprocess.Popen") as mock_popen:
            assert OpenerService("file-manager").open(str(temp_dir)) is None

        assert mock_popen.call_args.kwargs["start_new_session"] is True
        assert not OpenerService("file-manager").is_interactive

    def test_editor_waits(self, temp_dir):
        with patch.dict(os.environ, {"VISUAL": "myeditor"}), patch(
            "subprocess.call", return_value=0
        ) as mock_call:
            assert OpenerService("editor").open(str(temp_dir)) is None

        mock_call.assert_called_once_with(["myeditor", str(temp_dir)], cwd=str(temp_dir))
        assert OpenerService("editor").is_interactive

    def test_editor_failure_returned(self, temp_dir):
        with patch.dict(os.environ, {"VISUAL": "myeditor"}), patch(
            "subprocess.call", return_value=2
        ):
            error = OpenerService("editor").open(str(temp_dir))

        assert isinstance(error, ProcessError)
        assert error.returncode == 2

    def test_missing_program_returned(self, temp_dir):
        with patch("subprocess.Popen", side_effect=FileNotFoundError("xdg-open")):
            error = OpenerService("file-manager").open(str(temp_dir))

        assert isinstance(error, ProcessError)
        assert "xdg-open" in str(error)
