"""Modal screens for the git-worktree-picker TUI."""

from typing import List, Optional, Sequence, Tuple

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Button, Input, OptionList, Static

from git_worktree_picker.constants import ANSWER_FORCE, ANSWER_NO, ANSWER_YES
from git_worktree_picker.services.filter_service import fuzzy_filter

# (answer, label, button variant)
Choice = Tuple[str, str, str]

YES_NO: List[Choice] = [
    (ANSWER_YES, "Yes", "error"),
    (ANSWER_NO, "No", "primary"),
]
YES_NO_FORCE: List[Choice] = YES_NO + [(ANSWER_FORCE, "Force", "warning")]
CONFLICT_CHOICES: List[Choice] = [
    ("detach", "Detach", "warning"),
    ("rename", "Rename", "primary"),
    ("cancel", "Cancel", "default"),
]

DIALOG_CSS = """
    #dialog {
        width: 80%;
        height: auto;
        max-height: 80%;
        border: thick $background 80%;
        background: $surface;
        padding: 1 2;
    }

    #message {
        width: 100%;
        height: auto;
        padding: 1 0;
    }

    #button-container {
        width: 100%;
        height: auto;
        align: center middle;
        padding: 1 0;
    }

    Button {
        margin: 0 1;
    }
"""


class ConfirmScreen(ModalScreen[Optional[str]]):
    """Modal confirmation dialog with two or three answers.

    Dismisses with the chosen answer, or None on Escape.
    """

    DEFAULT_CSS = """
    ConfirmScreen {
        align: center middle;
    }
    """ + DIALOG_CSS

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, message: str, choices: Sequence[Choice] = YES_NO):
        super().__init__()
        self.message = message
        self.choices = list(choices)

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static(self.message, id="message", markup=False)
            with Container(id="button-container"):
                for answer, label, variant in self.choices:
                    yield Button(label, variant=variant, id=answer)

    def on_key(self, event: Key) -> None:
        """First letter of an answer selects it."""
        for answer, _, _ in self.choices:
            if event.key == answer[0]:
                event.stop()
                self.dismiss(answer)
                return

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button press."""
        self.dismiss(event.button.id)

    def action_cancel(self) -> None:
        self.dismiss(None)


class InputScreen(ModalScreen[Optional[str]]):
    """Free-text prompt.

    Dismisses with the entered text (or ``default`` when left empty), or None
    on Escape.
    """

    DEFAULT_CSS = """
    InputScreen {
        align: center middle;
    }
    """ + DIALOG_CSS

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, prompt: str, default: Optional[str] = None):
        super().__init__()
        self.prompt = prompt
        self.default = default

    def compose(self) -> ComposeResult:
        label = f"{self.prompt} (default: {self.default})" if self.default else self.prompt
        with Vertical(id="dialog"):
            yield Static(label, id="message", markup=False)
            yield Input(placeholder=self.default or "", id="prompt-input")

    def on_mount(self) -> None:
        self.query_one(Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value.strip() or self.default or "")

    def action_cancel(self) -> None:
        self.dismiss(None)


class BranchPickerScreen(ModalScreen[Optional[str]]):
    """Fuzzy-filtered branch list."""

    DEFAULT_CSS = """
    BranchPickerScreen {
        align: center middle;
    }

    #branch-list {
        height: auto;
        max-height: 20;
    }
    """ + DIALOG_CSS

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("down", "move(1)", "Down", show=False),
        Binding("up", "move(-1)", "Up", show=False),
    ]

    def __init__(self, branches: Sequence[str], title: str = "Select branch for worktree"):
        super().__init__()
        self.branches = list(branches)
        self.title_text = title
        self.visible: List[str] = list(branches)

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static(self.title_text, id="message", markup=False)
            yield Input(placeholder="Filter branches", id="branch-filter")
            yield OptionList(*self.visible, id="branch-list")

    def on_mount(self) -> None:
        self.query_one(Input).focus()
        if self.visible:
            self.query_one(OptionList).highlighted = 0

    def on_input_changed(self, event: Input.Changed) -> None:
        self.visible = fuzzy_filter(event.value, self.branches)
        options = self.query_one(OptionList)
        options.clear_options()
        options.add_options(self.visible)
        if self.visible:
            options.highlighted = 0

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        highlighted = self.query_one(OptionList).highlighted
        if highlighted is not None and highlighted < len(self.visible):
            self.dismiss(self.visible[highlighted])

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.dismiss(self.visible[event.option_index])

    def action_move(self, delta: int) -> None:
        options = self.query_one(OptionList)
        if not self.visible:
            return
        current = options.highlighted or 0
        options.highlighted = max(0, min(len(self.visible) - 1, current + delta))

    def action_cancel(self) -> None:
        self.dismiss(None)


class InfoScreen(ModalScreen):
    """Modal info display dialog, used for error messages."""

    DEFAULT_CSS = """
    InfoScreen {
        align: center middle;
    }
    """ + DIALOG_CSS

    BINDINGS = [Binding("escape", "close", "Close")]

    def __init__(self, info: str):
        super().__init__()
        self.info = info

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static(self.info, id="message", markup=False)
            with Container(id="button-container"):
                yield Button("Close", variant="primary", id="close")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button press."""
        self.dismiss()

    def action_close(self) -> None:
        self.dismiss()
