"""Rich renderers for questions, quizzes and notifications."""

from __future__ import annotations

from collections.abc import Sequence

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from quiz_author.bank.errors import Notification
from quiz_author.bank.models import Question, Quiz

__all__ = [
    "option_letter",
    "question_panel",
    "render_notification",
    "render_questions",
    "render_quiz_detail",
    "render_quizzes",
]

MISSING_PLACEHOLDER = "(missing question {0})"


def option_letter(index: int) -> str:
    return chr(ord("A") + index)


def question_panel(
    question: Question,
    *,
    selected: bool | None = None,
    title: str | None = None,
) -> Panel:
    """Render one question card with lettered options.

    The correct option is highlighted in green. When ``selected`` is not
    ``None`` a checkbox marker is shown in the title, as on the quiz
    selection screen.
    """

    table = Table(show_header=False, box=box.SIMPLE, expand=True)
    table.add_column("Key", justify="center", style="cyan", width=3)
    table.add_column("Option")
    for index, option in enumerate(question.options):
        text = Text(option.text or "", style="" if option.text else "dim")
        if option.is_correct:
            text.stylize("bold green")
            text.append("  ✓", style="green")
        table.add_row(option_letter(index), text)

    heading = Text(question.text or "(no text)", style="bold")
    subtitle = Text(f"Category: {question.category}", style="dim")
    marker = ""
    if selected is not None:
        marker = "[x] " if selected else "[ ] "
    return Panel(
        Group(heading, subtitle, table),
        title=Text(title or f"{marker}{question.id}"),
        title_align="left",
        border_style="cyan" if selected else "white",
    )


def render_questions(
    console: Console,
    questions: Sequence[Question],
    *,
    category: str = "All",
    selected_ids: Sequence[str] | None = None,
) -> None:
    if not questions:
        message = (
            "No questions available in the question bank."
            if category == "All"
            else "No questions found in this category."
        )
        console.print(Text(message, style="dim"))
        return
    selected = set(selected_ids) if selected_ids is not None else None
    for question in questions:
        console.print(
            question_panel(
                question,
                selected=(question.id in selected) if selected is not None else None,
            )
        )


def render_quizzes(console: Console, quizzes: Sequence[Quiz]) -> None:
    if not quizzes:
        console.print(Text("No quizzes yet.", style="dim"))
        return
    table = Table(title="Quizzes", box=box.SIMPLE_HEAVY, expand=True)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Description")
    table.add_column("Created", no_wrap=True)
    for quiz in quizzes:
        table.add_row(
            quiz.id, Text(quiz.title), Text(quiz.description), quiz.created_at
        )
    console.print(table)


def render_quiz_detail(
    console: Console,
    quiz: Quiz,
    resolved: Sequence[tuple[str, Question | None]],
) -> None:
    console.rule(Text(quiz.title, style="bold magenta"))
    console.print(
        Text(f"{quiz.description} | Created {quiz.created_at}", style="dim")
    )
    for position, (question_id, question) in enumerate(resolved, start=1):
        if question is None:
            console.print(
                Text(
                    f"{position}. " + MISSING_PLACEHOLDER.format(question_id),
                    style="dim italic",
                )
            )
            continue
        console.print(question_panel(question, title=f"{position}. {question.id}"))


def render_notification(console: Console, notice: Notification) -> None:
    border = "red" if notice.variant == "destructive" else "green"
    console.print(
        Panel(
            Text(notice.description),
            title=Text(notice.title, style="bold"),
            title_align="left",
            border_style=border,
        )
    )
