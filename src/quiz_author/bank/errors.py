"""Error taxonomy and user-facing notifications for the question bank."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

__all__ = [
    "QuizAuthorError",
    "ValidationError",
    "EmptyPoolError",
    "StorageError",
    "Notification",
    "notification_for",
]

Variant = Literal["default", "destructive"]


class QuizAuthorError(RuntimeError):
    """Base class for recoverable quiz-author failures."""


class ValidationError(QuizAuthorError):
    """A draft question or quiz failed validation.

    ``code`` is a stable machine-readable identifier, ``title`` and
    ``description`` are the short and long user-facing messages.
    """

    def __init__(self, code: str, title: str, description: str) -> None:
        super().__init__(description)
        self.code = code
        self.title = title
        self.description = description


class EmptyPoolError(QuizAuthorError):
    """Raised when a quiz is assembled from an empty question pool."""

    title = "No questions available"
    description = "No questions available in the question bank."

    def __init__(self) -> None:
        super().__init__(self.description)


class StorageError(QuizAuthorError):
    """Raised by storage backends when a snapshot cannot be read or written."""


@dataclass(frozen=True)
class Notification:
    """A dismissable message shown to the user after an action."""

    title: str
    description: str
    variant: Variant = "default"


def notification_for(exc: QuizAuthorError) -> Notification:
    """Translate a recoverable error into a destructive notification."""

    title = getattr(exc, "title", None) or "Something went wrong"
    description = getattr(exc, "description", None) or str(exc)
    return Notification(title, description, variant="destructive")
