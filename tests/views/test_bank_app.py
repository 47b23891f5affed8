from __future__ import annotations

from types import SimpleNamespace

import pytest

from quiz_author.bank.models import Quiz
from quiz_author.views import app as bank_app


@pytest.fixture
def app(question_store, quiz_store, pool):
    question_store.save(pool)
    return bank_app.QuestionBankApp(question_store, quiz_store)


def test_navigation_stays_in_bounds(app):
    assert app.current_question().id == "q1"
    assert app.prev_question() == 0
    assert app.next_question() == 1
    assert app.next_question() == 2
    assert app.next_question() == 2
    assert app.current_question().id == "q3"


def test_cycle_filter_walks_categories(app):
    seen = [app.current_filter]
    for _ in range(4):
        seen.append(app.cycle_filter())

    assert seen == ["All", "Math", "Geography", "Science", "All"]


def test_filter_limits_visible_questions(app):
    app.cycle_filter()
    app.cycle_filter()

    assert app.current_filter == "Geography"
    assert [q.id for q in app.visible_questions()] == ["q2"]
    assert app.current_question().id == "q2"


def test_delete_current_removes_from_store(app, question_store):
    app.next_question()

    deleted = app.delete_current()

    assert deleted.id == "q2"
    assert [q.id for q in question_store.load()] == ["q1", "q3"]
    assert app.current_question().id == "q3"
    assert "Deleted q2." in app._status


def test_deleting_last_in_category_resets_filter(app):
    app.cycle_filter()
    assert app.current_filter == "Math"

    app.delete_current()

    assert app.current_filter == "All"
    assert [q.id for q in app.visible_questions()] == ["q2", "q3"]


def test_delete_on_empty_bank_is_noop(question_store, quiz_store):
    empty = bank_app.QuestionBankApp(question_store, quiz_store)

    assert empty.current_question() is None
    assert empty.delete_current() is None
    assert "No questions available" in str(empty._stage_renderable())


def test_quiz_summary_lists_saved_quizzes(app, quiz_store):
    assert app._quiz_summary() == "No quizzes yet."

    quiz_store.add(
        Quiz("quiz-1", "Basics", "3 questions", "May 10, 2025", ("q1",))
    )

    summary = app._quiz_summary()
    assert "Quizzes (1):" in summary
    assert "Basics - 3 questions (May 10, 2025)" in summary


def test_compose_yields_expected_widgets(app, monkeypatch):
    class StubContainer:
        def __init__(self, *_, **kwargs):
            self.id = kwargs.get("id")

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb) -> bool:
            return False

    class StubWidget:
        def __init__(self, *args, id: str | None = None, **kwargs):
            self.args = args
            self.id = id

    monkeypatch.setattr(bank_app, "Container", StubContainer)
    monkeypatch.setattr(bank_app, "Horizontal", StubContainer)
    monkeypatch.setattr(bank_app, "Static", StubWidget)
    monkeypatch.setattr(bank_app, "Button", StubWidget)
    monkeypatch.setattr(bank_app, "Footer", StubWidget)

    ids = {widget.id for widget in app.compose()}

    assert {"filter", "question", "prev", "next", "delete", "status"} <= ids


def test_button_presses_route_to_helpers(app):
    def press(button_id: str) -> None:
        app.on_button_pressed(SimpleNamespace(button=SimpleNamespace(id=button_id)))

    press("next")
    assert app.current_question().id == "q2"
    press("prev")
    assert app.current_question().id == "q1"
    press("filter-button")
    assert app.current_filter == "Math"
    press("delete")
    assert app.current_filter == "All"
    press("unknown")


def test_actions_delegate(app):
    app.action_next()
    app.action_prev()
    app.action_cycle_filter()
    app.action_delete()

    assert len(app.visible_questions()) == 2
