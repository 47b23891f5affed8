"""Form state for authoring a single question."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from .models import Option, Question, new_question_id
from .repository import QuestionStore

__all__ = ["QuestionEditor"]


class QuestionEditor:
    """Hold a draft question and commit it to a :class:`QuestionStore`.

    Marking an option correct clears every other option, so a draft never
    carries more than one correct answer. A failed ``commit`` leaves the draft
    as it was so the user can fix it.
    """

    def __init__(
        self,
        store: QuestionStore,
        *,
        default_category: str = "General",
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._store = store
        self._default_category = default_category
        self._id_factory = id_factory or new_question_id
        self.draft = self._blank()

    def _blank(self) -> Question:
        return Question.blank(self._id_factory(), self._default_category)

    def reset(self) -> Question:
        self.draft = self._blank()
        return self.draft

    def load(self, question: Question) -> Question:
        """Start editing an existing question; committing replaces it."""

        self.draft = question
        return self.draft

    def set_text(self, text: str) -> None:
        self.draft = replace(self.draft, text=text)

    def set_category(self, category: str) -> None:
        self.draft = replace(self.draft, category=category)

    def set_option_text(self, option_id: str, text: str) -> None:
        self.draft.option(option_id)
        self.draft = self.draft.with_options(
            tuple(
                replace(option, text=text) if option.id == option_id else option
                for option in self.draft.options
            )
        )

    def set_correct(self, option_id: str) -> None:
        self.draft.option(option_id)
        self.draft = self.draft.with_options(
            tuple(
                replace(option, is_correct=option.id == option_id)
                for option in self.draft.options
            )
        )

    def option_for_letter(self, letter: str) -> Option:
        """Map ``A``..``D`` to the option in that position."""

        normalized = letter.strip().upper()[:1]
        index = ord(normalized) - ord("A") if normalized else -1
        if not 0 <= index < len(self.draft.options):
            raise KeyError(f"No option labelled '{letter}'.")
        return self.draft.options[index]

    def commit(self) -> Question:
        committed = self._store.add(self.draft)
        self.reset()
        return committed
