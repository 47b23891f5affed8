"""Category listing and filtering for the question bank."""

from __future__ import annotations

from typing import Iterable, Sequence

from .models import Question

__all__ = [
    "ALL_CATEGORIES",
    "CATEGORY_CHOICES",
    "categories",
    "filter_questions",
]

ALL_CATEGORIES = "All"
CATEGORY_CHOICES: tuple[str, ...] = (
    "General",
    "Science",
    "History",
    "Geography",
    "Art",
    "Sports",
)


def categories(questions: Iterable[Question]) -> list[str]:
    """Return ``"All"`` followed by each category in first-seen order."""

    seen: dict[str, None] = {}
    for question in questions:
        seen.setdefault(question.category, None)
    return [ALL_CATEGORIES, *seen]


def filter_questions(
    questions: Sequence[Question], selected: str
) -> Sequence[Question]:
    if selected == ALL_CATEGORIES:
        return questions
    return [question for question in questions if question.category == selected]
