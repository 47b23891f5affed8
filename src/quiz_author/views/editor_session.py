"""Rich prompt loop for authoring questions one draft at a time.

The loop reads commands from an injected input provider so it can be driven
by ``console.input`` interactively and by canned command lists in tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Callable, Literal

from rich.console import Console
from rich.text import Text

from quiz_author.bank.editor import QuestionEditor
from quiz_author.bank.errors import (
    Notification,
    ValidationError,
    notification_for,
)
from quiz_author.bank.models import Question

from .render import question_panel, render_notification

InputProvider = Callable[[], str]
ExitAction = Literal["quit", "interrupted"]
CommandType = Literal[
    "text", "category", "option", "correct", "show", "commit", "reset",
    "help", "quit",
]

HELP_TEXT = (
    "Commands: text <question>, category <name>, option <A-D> <text>, "
    "correct <A-D>, show, commit, reset, help, quit"
)

_ALIASES: dict[str, CommandType] = {
    "text": "text",
    "t": "text",
    "category": "category",
    "cat": "category",
    "option": "option",
    "o": "option",
    "correct": "correct",
    "answer": "correct",
    "show": "show",
    "commit": "commit",
    "save": "commit",
    "reset": "reset",
    "clear": "reset",
    "help": "help",
    "?": "help",
    "quit": "quit",
    "q": "quit",
    "exit": "quit",
}


@dataclass(frozen=True)
class EditorCommand:
    type: CommandType
    argument: str = ""
    letter: str | None = None


@dataclass
class EditorSessionResult:
    committed: list[Question] = field(default_factory=list)
    exit_action: ExitAction = "quit"


def parse_editor_command(raw: str | None) -> EditorCommand | None:
    """Parse one line of user input; ``None`` means unrecognised."""

    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    head, _, rest = text.partition(" ")
    command = _ALIASES.get(head.lower())
    if command is None:
        return None
    rest = rest.strip()
    if command == "option":
        letter, _, option_text = rest.partition(" ")
        if not letter:
            return None
        return EditorCommand("option", option_text.strip(), letter.upper())
    if command == "correct":
        if not rest:
            return None
        return EditorCommand("correct", letter=rest[:1].upper())
    return EditorCommand(command, rest)


def run_editor_session(
    editor: QuestionEditor,
    console: Console,
    input_provider: InputProvider,
    *,
    categories: Sequence[str] = (),
) -> EditorSessionResult:
    result = EditorSessionResult()
    console.print(Text(HELP_TEXT, style="dim"))
    while True:
        try:
            raw = input_provider()
        except (EOFError, KeyboardInterrupt, StopIteration):
            console.print("\n[bold yellow]Editor interrupted.[/]")
            result.exit_action = "interrupted"
            return result
        command = parse_editor_command(raw)
        if command is None:
            console.print("[red]Unrecognized command.[/] " + HELP_TEXT)
            continue
        if command.type == "quit":
            if result.committed:
                console.print(
                    f"Added {len(result.committed)} question(s) to the bank."
                )
            return result
        committed = _apply_command(command, editor, console, categories)
        if committed is not None:
            result.committed.append(committed)


def _apply_command(
    command: EditorCommand,
    editor: QuestionEditor,
    console: Console,
    categories: Sequence[str],
) -> Question | None:
    if command.type == "text":
        editor.set_text(command.argument)
    elif command.type == "category":
        if categories and command.argument not in categories:
            console.print(
                f"[red]Unknown category '{command.argument}'.[/] "
                f"Choose one of: {', '.join(categories)}"
            )
        else:
            editor.set_category(command.argument)
    elif command.type in ("option", "correct"):
        try:
            option = editor.option_for_letter(command.letter or "")
        except KeyError:
            console.print(
                f"[red]'{command.letter}' is not a valid option letter.[/]"
            )
            return None
        if command.type == "option":
            editor.set_option_text(option.id, command.argument)
        else:
            editor.set_correct(option.id)
    elif command.type == "show":
        console.print(question_panel(editor.draft, title="Draft"))
    elif command.type == "reset":
        editor.reset()
        console.print("Draft cleared.")
    elif command.type == "help":
        console.print(HELP_TEXT)
    elif command.type == "commit":
        return _commit(editor, console)
    return None


def _commit(editor: QuestionEditor, console: Console) -> Question | None:
    try:
        question = editor.commit()
    except ValidationError as exc:
        render_notification(console, notification_for(exc))
        return None
    render_notification(
        console,
        Notification(
            "Question added",
            "Your question has been added to the question bank.",
        ),
    )
    return question
