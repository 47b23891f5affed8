"""Validation rules applied before a question or quiz is persisted."""

from __future__ import annotations

from typing import Sequence

from .errors import ValidationError
from .models import OPTION_IDS, Question

__all__ = ["validate_question", "validate_quiz_submission"]


def validate_question(question: Question) -> None:
    """Raise :class:`ValidationError` unless ``question`` may be stored.

    Checks run in the order the authoring form reports them: question text,
    correct answer, option texts. Structural checks (option count, duplicate
    ids, several correct answers) come last since the editor never produces
    such drafts.
    """

    if not question.text.strip():
        raise ValidationError(
            "blank_text",
            "Missing question text",
            "Please provide text for your question.",
        )
    correct = question.correct_options
    if not correct:
        raise ValidationError(
            "no_correct_option",
            "Missing correct answer",
            "No correct option: please mark one option as correct.",
        )
    if any(not option.text.strip() for option in question.options):
        raise ValidationError(
            "incomplete_options",
            "Incomplete options",
            "Please fill in all option texts.",
        )
    if len(question.options) != len(OPTION_IDS):
        raise ValidationError(
            "option_count",
            "Wrong number of options",
            f"A question needs exactly {len(OPTION_IDS)} options, "
            f"found {len(question.options)}.",
        )
    ids = [option.id for option in question.options]
    if len(set(ids)) != len(ids):
        raise ValidationError(
            "duplicate_option_ids",
            "Duplicate options",
            "Option identifiers must be unique within a question.",
        )
    if len(correct) > 1:
        raise ValidationError(
            "multiple_correct_options",
            "Too many correct answers",
            "Exactly one option may be marked as correct.",
        )


def validate_quiz_submission(title: str, selected: Sequence[str]) -> None:
    """Reject quizzes without a title or without any selected question."""

    if not title.strip():
        raise ValidationError(
            "blank_title",
            "Missing title",
            "Please provide a title for your quiz.",
        )
    if not selected:
        raise ValidationError(
            "no_selection",
            "No questions selected",
            "Please select at least one question for your quiz.",
        )
