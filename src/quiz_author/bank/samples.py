"""Starter content shown before the user has saved anything."""

from __future__ import annotations

from .models import Option, Question


def _question(
    question_id: str,
    text: str,
    category: str,
    answers: tuple[str, str, str, str],
    correct: int,
) -> Question:
    options = tuple(
        Option(f"o{index + 1}", answer, is_correct=index == correct)
        for index, answer in enumerate(answers)
    )
    return Question(question_id, text, category, options)


SAMPLE_QUESTIONS: tuple[Question, ...] = (
    _question(
        "q1",
        "What is the capital of France?",
        "Geography",
        ("Paris", "London", "Berlin", "Madrid"),
        0,
    ),
    _question(
        "q2",
        "Which planet is known as the Red Planet?",
        "Science",
        ("Venus", "Mars", "Jupiter", "Saturn"),
        1,
    ),
    _question(
        "q3",
        "Who painted the Mona Lisa?",
        "Art",
        ("Vincent van Gogh", "Pablo Picasso", "Leonardo da Vinci", "Michelangelo"),
        2,
    ),
)
