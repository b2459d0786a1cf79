"""Tests for console prompts"""
from unittest.mock import Mock

import pytest

from git_worktree_picker.models.plan import ConflictResolution
from git_worktree_picker.prompts import ConsolePrompter


def prompter_with(*answers):
    console = Mock()
    console.input.side_effect = list(answers)
    return ConsolePrompter(console)


class TestConfirm:
    """Test two- and three-way confirmation."""

    @pytest.mark.parametrize(
        "answer,expected",
        [("y", "yes"), ("yes", "yes"), ("N", "no"), ("", "no"), ("f", "force"), ("x", "no")],
    )
    def test_answers(self, answer, expected):
        prompter = prompter_with(answer)
        assert prompter.confirm("Delete?", ("yes", "no", "force")) == expected

    def test_interrupt_cancels(self):
        assert prompter_with(KeyboardInterrupt()).confirm("Delete?") is None

    def test_end_of_input_cancels(self):
        assert prompter_with(EOFError()).confirm("Delete?") is None


class TestAsk:
    """Test free-text prompts."""

    def test_default(self):
        assert prompter_with("").ask("Path", default="dev") == "dev"

    def test_answer(self):
        assert prompter_with("  ../x  ").ask("Path", default="dev") == "../x"

    def test_empty_without_default_cancels(self):
        assert prompter_with("").ask("Branch name") is None


class TestChoose:
    """Test picking from a numbered list."""

    OPTIONS = ["main", "feature/login", "fix-typo"]

    def test_by_number(self):
        assert prompter_with("2").choose("Branches", self.OPTIONS) == "feature/login"

    def test_out_of_range(self):
        assert prompter_with("9").choose("Branches", self.OPTIONS) is None

    def test_by_name(self):
        assert prompter_with("fix-typo").choose("Branches", self.OPTIONS) == "fix-typo"

    def test_by_fuzzy_match(self):
        assert prompter_with("login").choose("Branches", self.OPTIONS) == "feature/login"

    def test_empty_options(self):
        prompter = prompter_with()
        assert prompter.choose("Branches", []) is None
        prompter.console.input.assert_not_called()


class TestChooseConflict:
    """Test the three-way conflict question."""

    def test_detach(self):
        policy = prompter_with("d").choose_conflict("dev", "/wt/dev")
        assert policy.resolution is ConflictResolution.DETACH

    def test_rename(self):
        policy = prompter_with("r", "dev-2").choose_conflict("dev", "/wt/dev")
        assert policy.resolution is ConflictResolution.RENAME
        assert policy.new_name == "dev-2"

    def test_rename_without_name_cancels(self):
        assert prompter_with("r", "").choose_conflict("dev", "/wt/dev") is None

    @pytest.mark.parametrize("answer", ["c", "", "nope"])
    def test_cancel(self, answer):
        assert prompter_with(answer).choose_conflict("dev", None) is None
