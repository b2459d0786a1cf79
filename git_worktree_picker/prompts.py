"""Console prompts: confirmation, free text and selection."""

from typing import Dict, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from git_worktree_picker.constants import ANSWER_FORCE, ANSWER_NO, ANSWER_YES
from git_worktree_picker.models.plan import ConflictPolicy
from git_worktree_picker.services.filter_service import fuzzy_filter


class ConsolePrompter:
    """Interactive prompts on the terminal.

    Every prompt returns None when the user cancels (Ctrl+C, Ctrl+D, or an
    empty answer without a default).
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def _input(self, prompt: str) -> Optional[str]:
        try:
            return self.console.input(prompt).strip()
        except (EOFError, KeyboardInterrupt):
            self.console.print()
            return None

    def ask(self, prompt: str, default: Optional[str] = None) -> Optional[str]:
        """Free-text input; an empty answer selects ``default``."""
        suffix = f" (default: {default})" if default else ""
        answer = self._input(f"{prompt}{suffix}: ")
        if answer is None:
            return None
        return answer or default

    def confirm(
        self,
        message: str,
        choices: Sequence[str] = (ANSWER_YES, ANSWER_NO),
        default: str = ANSWER_NO,
    ) -> Optional[str]:
        """Ask for one of ``choices`` by full word or first letter."""
        keys: Dict[str, str] = {choice[0]: choice for choice in choices}
        labels = " / ".join(f"\\[{choice[0].upper()}]{choice[1:]}" for choice in choices)
        answer = self._input(f"{message} {labels} ")
        if answer is None:
            return None
        answer = answer.lower()
        if not answer:
            return default
        if answer in choices:
            return answer
        return keys.get(answer[0], default)

    def confirm_branch_deletion(self, branch: str) -> Optional[str]:
        return self.confirm(
            f"Delete branch '{branch}' too?", (ANSWER_YES, ANSWER_NO, ANSWER_FORCE)
        )

    def choose(self, title: str, options: Sequence[str]) -> Optional[str]:
        """Pick one option by number, exact name, or best fuzzy match."""
        if not options:
            return None
        self.console.print(f"[bold]{title}[/bold]")
        for index, option in enumerate(options, start=1):
            self.console.print(f"  [cyan]{index:>3}[/cyan]  {escape(option)}")

        answer = self._input("Select (number or name): ")
        if not answer:
            return None
        if answer.isdigit():
            index = int(answer)
            return options[index - 1] if 1 <= index <= len(options) else None
        if answer in options:
            return answer
        matches = fuzzy_filter(answer, options)
        return matches[0] if matches else None

    def choose_conflict(
        self, branch: str, attached_path: Optional[str]
    ) -> Optional[ConflictPolicy]:
        """Three-way choice for a branch that is already checked out elsewhere."""
        where = f" at {attached_path}" if attached_path else ""
        answer = self.confirm(
            f"Branch '{branch}' is already checked out{where}.",
            ("detach", "rename", "cancel"),
            default="cancel",
        )
        if answer == "detach":
            return ConflictPolicy.detach()
        if answer == "rename":
            new_name = self.ask("New branch name")
            return ConflictPolicy.rename(new_name) if new_name else None
        return None
