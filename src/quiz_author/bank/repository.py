"""Question and quiz repositories over a key-value storage backend.

Each repository owns one storage key and rewrites the whole collection on
every change. Persistence failures are logged and swallowed: the in-memory
collection stays authoritative for the rest of the session.
"""

from __future__ import annotations

import json
import logging
from typing import Callable, Generic, Iterable, Literal, Mapping, TypeVar

from .errors import StorageError
from .models import Question, Quiz
from .storage import KeyValueStorage
from .validation import validate_question

__all__ = [
    "QUESTIONS_KEY",
    "QUIZZES_KEY",
    "QuestionStore",
    "QuizStore",
]

QUESTIONS_KEY = "questions"
QUIZZES_KEY = "quizzes"

T = TypeVar("T", Question, Quiz)
MissingPolicy = Literal["placeholder", "skip"]


class _SnapshotStore(Generic[T]):
    key: str
    _decode: Callable[[Mapping[str, object]], T]

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        defaults: Iterable[T] = (),
        logger: logging.Logger | None = None,
    ) -> None:
        self._storage = storage
        self._defaults = list(defaults)
        self._logger = logger or logging.getLogger(__name__)
        self._items: list[T] | None = None

    @property
    def items(self) -> list[T]:
        if self._items is None:
            return self.load()
        return list(self._items)

    def load(self) -> list[T]:
        """Read the collection from storage, refreshing the in-memory copy."""

        try:
            raw = self._storage.get_item(self.key)
        except StorageError:
            self._logger.exception(
                "Failed to read collection",
                extra={"event": "storage_read_failed", "key": self.key},
            )
            if self._items is None:
                self._items = list(self._defaults)
            return list(self._items)

        if raw is None:
            self._items = list(self._defaults)
        else:
            self._items = self._parse(raw)
        return list(self._items)

    def save(self, items: Iterable[T]) -> bool:
        """Replace the collection and persist it; return ``False`` on failure."""

        self._items = list(items)
        return self._persist()

    def _parse(self, raw: str) -> list[T]:
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"'{self.key}' must hold a JSON array")
            return [self._decode(item) for item in data]
        except (ValueError, TypeError, AttributeError):
            self._logger.exception(
                "Stored collection is unreadable; using defaults",
                extra={"event": "storage_parse_failed", "key": self.key},
            )
            return list(self._defaults)

    def _persist(self) -> bool:
        records = [item.to_dict() for item in self._items or []]
        try:
            payload = json.dumps(records, ensure_ascii=False, indent=2)
            self._storage.set_item(self.key, payload)
        except (StorageError, TypeError, ValueError):
            self._logger.exception(
                "Failed to persist collection",
                extra={
                    "event": "storage_write_failed",
                    "key": self.key,
                    "count": len(records),
                },
            )
            return False
        self._logger.debug(
            "Persisted collection",
            extra={
                "event": "storage_written",
                "key": self.key,
                "count": len(records),
            },
        )
        return True


class QuestionStore(_SnapshotStore[Question]):
    """The question bank."""

    key = QUESTIONS_KEY
    _decode = staticmethod(Question.from_dict)

    def __len__(self) -> int:
        return len(self.items)

    def get(self, question_id: str) -> Question | None:
        for question in self.items:
            if question.id == question_id:
                return question
        return None

    def add(self, question: Question) -> Question:
        """Validate and store ``question``.

        A question whose id is already in the bank replaces the stored one in
        place. Invalid questions raise ``ValidationError`` and leave the bank
        untouched.
        """

        validate_question(question)
        items = self.items
        for index, existing in enumerate(items):
            if existing.id == question.id:
                items[index] = question
                break
        else:
            items.append(question)
        self.save(items)
        self._logger.info(
            "Question stored",
            extra={"event": "question_added", "question_id": question.id},
        )
        return question

    def remove(self, question_id: str) -> bool:
        items = self.items
        kept = [question for question in items if question.id != question_id]
        if len(kept) == len(items):
            return False
        self.save(kept)
        self._logger.info(
            "Question removed",
            extra={"event": "question_removed", "question_id": question_id},
        )
        return True


class QuizStore(_SnapshotStore[Quiz]):
    """Assembled quizzes. Quizzes are append-only."""

    key = QUIZZES_KEY
    _decode = staticmethod(Quiz.from_dict)

    def get(self, quiz_id: str) -> Quiz | None:
        for quiz in self.items:
            if quiz.id == quiz_id:
                return quiz
        return None

    def add(self, quiz: Quiz) -> Quiz:
        self.save([*self.items, quiz])
        self._logger.info(
            "Quiz stored",
            extra={
                "event": "quiz_added",
                "quiz_id": quiz.id,
                "question_count": len(quiz.questions),
            },
        )
        return quiz

    @staticmethod
    def resolve_questions(
        quiz: Quiz,
        bank: Iterable[Question],
        *,
        missing: MissingPolicy = "placeholder",
    ) -> list[tuple[str, Question | None]]:
        """Look up each referenced question id in ``bank``.

        Ids whose question no longer exists map to ``None`` with the
        ``"placeholder"`` policy and are dropped with ``"skip"``.
        """

        by_id = {question.id: question for question in bank}
        resolved: list[tuple[str, Question | None]] = []
        for question_id in quiz.questions:
            question = by_id.get(question_id)
            if question is None and missing == "skip":
                continue
            resolved.append((question_id, question))
        return resolved
