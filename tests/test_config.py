"""Tests for configuration handling"""
import pytest

from git_worktree_picker.config import Config


class TestConfigValidation:
    """Test Config defaults and validation."""

    def test_defaults(self):
        config = Config()
        assert config.chdir_mode == "tab"
        assert config.open_after == "none"
        assert config.copy_files == [".env", ".env.local"]
        assert config.remote_name == "origin"
        assert config.worktree_root is None
        assert config.on_switch is None

    def test_defaults_are_not_shared(self):
        first = Config()
        first.copy_files.append(".npmrc")
        assert Config().copy_files == [".env", ".env.local"]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"chdir_mode": "global"},
            {"open_after": "browser"},
            {"copy_files": ".env"},
            {"on_switch": "not callable"},
            {"remote_name": "  "},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            Config(**kwargs)

    def test_empty_copy_file_names_dropped(self):
        assert Config(copy_files=[".env", ""]).copy_files == [".env"]


class TestConfigConversion:
    """Test dict conversion and overrides."""

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"chdir_mode": "process", "stale_days": 30})
        assert config.chdir_mode == "process"

    def test_to_dict_and_get(self):
        config = Config(remote_name="upstream")
        assert config.to_dict()["remote_name"] == "upstream"
        assert config.get("remote_name") == "upstream"
        assert config.get("nope", 42) == 42

    def test_merged_skips_none(self):
        base = Config(chdir_mode="window", remote_name="upstream")
        merged = base.merged({"chdir_mode": None, "open_after": "editor", "unknown": 1})

        assert merged.chdir_mode == "window"
        assert merged.open_after == "editor"
        assert merged.remote_name == "upstream"
        # The original is untouched
        assert base.open_after == "none"

    def test_merged_validates(self):
        with pytest.raises(ValueError):
            Config().merged({"chdir_mode": "global"})

    def test_merged_empty_copy_files(self):
        assert Config().merged({"copy_files": []}).copy_files == []


class TestConfigFromGitConfig:
    """Test reading the [worktree-picker] section."""

    def test_reads_section(self, git_repo):
        with git_repo.config_writer() as writer:
            writer.set_value("worktree-picker", "chdir-mode", "process")
            writer.set_value("worktree-picker", "open-after", "file-manager")
            writer.set_value("worktree-picker", "remote", "upstream")
            writer.set_value("worktree-picker", "worktree-root", "../trees")
        git_repo.git.config("--add", "worktree-picker.copy-files", ".env")
        git_repo.git.config("--add", "worktree-picker.copy-files", ".tool-versions")

        config = Config.from_git_config(git_repo.working_dir)

        assert config.chdir_mode == "process"
        assert config.open_after == "file-manager"
        assert config.remote_name == "upstream"
        assert config.worktree_root == "../trees"
        assert config.copy_files == [".env", ".tool-versions"]

    def test_missing_section_uses_defaults(self, git_repo):
        assert Config.from_git_config(git_repo.working_dir) == Config()

    def test_not_a_repository(self, temp_dir):
        assert Config.from_git_config(str(temp_dir)) == Config()

    def test_invalid_value_raises(self, git_repo):
        git_repo.git.config("worktree-picker.chdir-mode", "everywhere")
        with pytest.raises(ValueError):
            Config.from_git_config(git_repo.working_dir)
