"""Data model for questions, options and quizzes.

Records serialise to the camelCase JSON shape used by the persisted
``questions`` and ``quizzes`` collections. Fields that are not part of the
model are kept in ``extra`` and written back untouched, so a load/save cycle
never drops data.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Mapping, MutableMapping

__all__ = [
    "Option",
    "Question",
    "Quiz",
    "OPTION_IDS",
    "new_question_id",
    "new_quiz_id",
    "format_created_at",
]

OPTION_IDS: tuple[str, ...] = ("o1", "o2", "o3", "o4")

_OPTION_FIELDS = {"id", "text", "isCorrect"}
_QUESTION_FIELDS = {"id", "text", "category", "options"}
_QUIZ_FIELDS = {"id", "title", "description", "createdAt", "questions"}


@dataclass(frozen=True)
class Option:
    id: str
    text: str
    is_correct: bool = False
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> MutableMapping[str, Any]:
        payload: MutableMapping[str, Any] = dict(self.extra)
        payload.update(
            {"id": self.id, "text": self.text, "isCorrect": self.is_correct}
        )
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Option":
        is_correct = payload.get("isCorrect", False)
        if not isinstance(is_correct, bool):
            raise ValueError("Option 'isCorrect' must be true or false.")
        return cls(
            id=str(payload.get("id", "")),
            text=str(payload.get("text", "")),
            is_correct=is_correct,
            extra=_extras(payload, _OPTION_FIELDS),
        )


@dataclass(frozen=True)
class Question:
    id: str
    text: str
    category: str
    options: tuple[Option, ...]
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def blank(cls, question_id: str, category: str = "General") -> "Question":
        """Return an empty draft with four unmarked options."""

        return cls(
            id=question_id,
            text="",
            category=category,
            options=tuple(Option(option_id, "") for option_id in OPTION_IDS),
        )

    @property
    def correct_options(self) -> tuple[Option, ...]:
        return tuple(option for option in self.options if option.is_correct)

    def option(self, option_id: str) -> Option:
        for candidate in self.options:
            if candidate.id == option_id:
                return candidate
        raise KeyError(f"Unknown option '{option_id}' on question {self.id}.")

    def with_options(self, options: tuple[Option, ...]) -> "Question":
        return replace(self, options=options)

    def to_dict(self) -> MutableMapping[str, Any]:
        payload: MutableMapping[str, Any] = dict(self.extra)
        payload.update(
            {
                "id": self.id,
                "text": self.text,
                "category": self.category,
                "options": [option.to_dict() for option in self.options],
            }
        )
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Question":
        raw_options = payload.get("options") or []
        if not isinstance(raw_options, list):
            raise ValueError("Question 'options' must be a list.")
        return cls(
            id=str(payload.get("id", "")),
            text=str(payload.get("text", "")),
            category=str(payload.get("category", "")),
            options=tuple(Option.from_dict(item) for item in raw_options),
            extra=_extras(payload, _QUESTION_FIELDS),
        )


@dataclass(frozen=True)
class Quiz:
    """An assembled quiz; ``questions`` holds question ids, not objects."""

    id: str
    title: str
    description: str
    created_at: str
    questions: tuple[str, ...]
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> MutableMapping[str, Any]:
        payload: MutableMapping[str, Any] = dict(self.extra)
        payload.update(
            {
                "id": self.id,
                "title": self.title,
                "description": self.description,
                "createdAt": self.created_at,
                "questions": list(self.questions),
            }
        )
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Quiz":
        raw_ids = payload.get("questions") or []
        if not isinstance(raw_ids, list):
            raise ValueError("Quiz 'questions' must be a list of ids.")
        return cls(
            id=str(payload.get("id", "")),
            title=str(payload.get("title", "")),
            description=str(payload.get("description", "")),
            created_at=str(payload.get("createdAt", "")),
            questions=tuple(str(item) for item in raw_ids),
            extra=_extras(payload, _QUIZ_FIELDS),
        )


def new_question_id() -> str:
    return f"q-{uuid.uuid4().hex[:12]}"


def new_quiz_id() -> str:
    return f"quiz-{uuid.uuid4().hex[:12]}"


def format_created_at(day: date) -> str:
    """Format ``day`` as a long US date such as ``May 10, 2025``."""

    return f"{day:%B} {day.day}, {day.year}"


def _extras(
    payload: Mapping[str, Any], known: set[str]
) -> Mapping[str, Any]:
    return {key: value for key, value in payload.items() if key not in known}
