"""Author multiple-choice questions and assemble quizzes from a local bank."""

from .bank import (
    EmptyPoolError,
    Option,
    Question,
    QuestionEditor,
    QuestionStore,
    Quiz,
    QuizStore,
    StorageError,
    ValidationError,
    assemble,
    categories,
    filter_questions,
)

__all__ = [
    "EmptyPoolError",
    "Option",
    "Question",
    "QuestionEditor",
    "QuestionStore",
    "Quiz",
    "QuizStore",
    "StorageError",
    "ValidationError",
    "assemble",
    "categories",
    "filter_questions",
]
