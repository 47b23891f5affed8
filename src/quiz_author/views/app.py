"""Textual browser for the question bank and saved quizzes."""

from __future__ import annotations

from typing import List, Optional, Sequence

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.css.query import NoMatches
from textual.widgets import Button, Footer, Static

from quiz_author.bank.filters import ALL_CATEGORIES, categories, filter_questions
from quiz_author.bank.models import Question
from quiz_author.bank.repository import QuestionStore, QuizStore

from .render import question_panel


class QuestionBankApp(App):
    CSS_PATH = None
    CSS = """
#filter { color: $accent; padding: 0 1; }
#status { color: $text-muted; padding: 0 1; }
#nav Button { margin: 0 1; }
"""
    BINDINGS = [
        ("j", "next", "Next"),
        ("k", "prev", "Prev"),
        ("f", "cycle_filter", "Filter"),
        ("d", "delete", "Delete"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, questions: QuestionStore, quizzes: QuizStore):
        super().__init__()
        self._store = questions
        self._quiz_store = quizzes
        self._filter = ALL_CATEGORIES
        self._index = 0
        self._status = ""

    def compose(self) -> ComposeResult:
        yield Static(self._filter_text(), id="filter")
        with Container(id="stage"):
            yield Static(self._stage_renderable(), id="question")
        with Horizontal(id="nav"):
            yield Button("Prev", id="prev")
            yield Button("Next", id="next")
            yield Button("Filter", id="filter-button")
            yield Button("Delete", id="delete", variant="error")
        yield Static(self._quiz_summary(), id="quizzes")
        yield Static(self._status, id="status")
        yield Footer()

    # Pure helpers; usable without running the app.
    @property
    def current_filter(self) -> str:
        return self._filter

    def visible_questions(self) -> Sequence[Question]:
        return filter_questions(self._store.items, self._filter)

    def current_question(self) -> Optional[Question]:
        visible = self.visible_questions()
        if not visible:
            return None
        return visible[min(self._index, len(visible) - 1)]

    def next_question(self) -> int:
        if self._index + 1 < len(self.visible_questions()):
            self._index += 1
        self._refresh()
        return self._index

    def prev_question(self) -> int:
        if self._index > 0:
            self._index -= 1
        self._refresh()
        return self._index

    def cycle_filter(self) -> str:
        options = categories(self._store.items)
        try:
            position = options.index(self._filter)
        except ValueError:
            position = -1
        self._filter = options[(position + 1) % len(options)]
        self._index = 0
        self._refresh()
        return self._filter

    def delete_current(self) -> Optional[Question]:
        question = self.current_question()
        if question is None:
            return None
        self._store.remove(question.id)
        if self._filter not in categories(self._store.items):
            self._filter = ALL_CATEGORIES
        remaining = len(self.visible_questions())
        self._index = max(0, min(self._index, remaining - 1))
        self._status = f"Deleted {question.id}."
        self._refresh()
        return question

    def _filter_text(self) -> str:
        total = len(self.visible_questions())
        return f"Filter by: {self._filter} ({total} question(s))"

    def _stage_renderable(self):
        question = self.current_question()
        if question is None:
            message = (
                "No questions available in the question bank."
                if self._filter == ALL_CATEGORIES
                else "No questions found in this category."
            )
            return Text(message, style="dim")
        position = min(self._index, len(self.visible_questions()) - 1) + 1
        return question_panel(
            question,
            title=f"{position}/{len(self.visible_questions())} {question.id}",
        )

    def _quiz_summary(self) -> str:
        quizzes = self._quiz_store.items
        if not quizzes:
            return "No quizzes yet."
        lines: List[str] = [f"Quizzes ({len(quizzes)}):"]
        for quiz in quizzes:
            lines.append(f"  {quiz.title} - {quiz.description} ({quiz.created_at})")
        return "\n".join(lines)

    def _refresh(self) -> None:
        if not self.is_running:
            return
        try:
            self.query_one("#filter", Static).update(self._filter_text())
            self.query_one("#question", Static).update(self._stage_renderable())
            self.query_one("#quizzes", Static).update(self._quiz_summary())
            self.query_one("#status", Static).update(self._status)
        except NoMatches:
            return

    def action_next(self) -> None:
        self.next_question()

    def action_prev(self) -> None:
        self.prev_question()

    def action_cycle_filter(self) -> None:
        self.cycle_filter()

    def action_delete(self) -> None:
        self.delete_current()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id == "next":
            self.next_question()
        elif button_id == "prev":
            self.prev_question()
        elif button_id == "filter-button":
            self.cycle_filter()
        elif button_id == "delete":
            self.delete_current()
