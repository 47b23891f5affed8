"""Question bank domain: models, storage, editing and quiz assembly."""

from __future__ import annotations

from .assembler import QuizDraft, assemble
from .editor import QuestionEditor
from .errors import (
    EmptyPoolError,
    Notification,
    QuizAuthorError,
    StorageError,
    ValidationError,
    notification_for,
)
from .filters import (
    ALL_CATEGORIES,
    CATEGORY_CHOICES,
    categories,
    filter_questions,
)
from .models import Option, Question, Quiz
from .repository import QUESTIONS_KEY, QUIZZES_KEY, QuestionStore, QuizStore
from .samples import SAMPLE_QUESTIONS
from .storage import FileStorage, KeyValueStorage, MemoryStorage
from .validation import validate_question, validate_quiz_submission

__all__ = [
    "QuizDraft",
    "assemble",
    "QuestionEditor",
    "EmptyPoolError",
    "Notification",
    "QuizAuthorError",
    "StorageError",
    "ValidationError",
    "notification_for",
    "ALL_CATEGORIES",
    "CATEGORY_CHOICES",
    "categories",
    "filter_questions",
    "Option",
    "Question",
    "Quiz",
    "QUESTIONS_KEY",
    "QUIZZES_KEY",
    "QuestionStore",
    "QuizStore",
    "SAMPLE_QUESTIONS",
    "FileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "validate_question",
    "validate_quiz_submission",
]
