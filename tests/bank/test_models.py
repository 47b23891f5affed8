from __future__ import annotations

import re
from datetime import date

import pytest

from quiz_author.bank.models import (
    OPTION_IDS,
    Option,
    Question,
    Quiz,
    format_created_at,
    new_question_id,
    new_quiz_id,
)


def test_blank_question_has_four_unmarked_options():
    draft = Question.blank("q-new", "Science")

    assert draft.text == ""
    assert draft.category == "Science"
    assert tuple(option.id for option in draft.options) == OPTION_IDS
    assert not draft.correct_options


def test_question_to_dict_uses_camel_case(question_factory):
    question = question_factory("q1", correct=0)

    payload = question.to_dict()

    assert payload["id"] == "q1"
    assert payload["category"] == "General"
    assert payload["options"][0] == {
        "id": "o1",
        "text": "Paris",
        "isCorrect": True,
    }
    assert payload["options"][1]["isCorrect"] is False


def test_from_dict_keeps_unknown_fields():
    payload = {
        "id": "q9",
        "text": "Largest ocean?",
        "category": "Geography",
        "difficulty": "easy",
        "options": [
            {"id": "o1", "text": "Pacific", "isCorrect": True, "hint": "big"},
            {"id": "o2", "text": "Atlantic", "isCorrect": False},
            {"id": "o3", "text": "Indian", "isCorrect": False},
            {"id": "o4", "text": "Arctic", "isCorrect": False},
        ],
    }

    question = Question.from_dict(payload)

    assert question.extra == {"difficulty": "easy"}
    assert question.options[0].extra == {"hint": "big"}
    assert question.to_dict() == payload


def test_from_dict_rejects_non_list_options():
    with pytest.raises(ValueError):
        Question.from_dict({"id": "q1", "options": "o1,o2"})


def test_option_lookup(question_factory):
    question = question_factory()

    assert question.option("o2").text == "London"
    with pytest.raises(KeyError):
        question.option("o9")


def test_extra_is_ignored_for_equality():
    plain = Option("o1", "Yes", True)
    annotated = Option("o1", "Yes", True, extra={"note": "x"})

    assert plain == annotated


def test_quiz_round_trips_question_ids():
    payload = {
        "id": "quiz-1",
        "title": "Basics",
        "description": "2 questions",
        "createdAt": "May 10, 2025",
        "questions": ["q1", "q2"],
        "theme": "dark",
    }

    quiz = Quiz.from_dict(payload)

    assert quiz.questions == ("q1", "q2")
    assert quiz.created_at == "May 10, 2025"
    assert quiz.to_dict() == payload


def test_quiz_from_dict_rejects_non_list_questions():
    with pytest.raises(ValueError):
        Quiz.from_dict({"id": "quiz-1", "questions": "q1"})


def test_generated_ids_are_prefixed_and_unique():
    question_ids = {new_question_id() for _ in range(50)}
    quiz_id = new_quiz_id()

    assert len(question_ids) == 50
    assert all(re.fullmatch(r"q-[0-9a-f]{12}", qid) for qid in question_ids)
    assert re.fullmatch(r"quiz-[0-9a-f]{12}", quiz_id)


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2025, 5, 10), "May 10, 2025"),
        (date(2024, 1, 3), "January 3, 2024"),
    ],
)
def test_format_created_at(day, expected):
    assert format_created_at(day) == expected


@pytest.mark.parametrize("flag", ["false", "true", 1, 0, None])
def test_option_from_dict_rejects_non_bool_correct_flag(flag):
    with pytest.raises(ValueError, match="isCorrect"):
        Option.from_dict({"id": "o1", "text": "Paris", "isCorrect": flag})


def test_option_from_dict_defaults_missing_flag_to_false():
    option = Option.from_dict({"id": "o2", "text": "Lyon"})

    assert option.is_correct is False
    assert option.to_dict()["isCorrect"] is False
