"""Random quiz assembly from the question bank.

Selection uses :meth:`random.Random.shuffle`, a Fisher-Yates shuffle, so every
subset of the pool is equally likely to be picked. Pass a seeded
``random.Random`` for reproducible selections.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional, Sequence

from .errors import EmptyPoolError
from .models import Question, Quiz, format_created_at, new_quiz_id
from .validation import validate_quiz_submission

__all__ = ["QuizDraft", "assemble"]


@dataclass
class QuizDraft:
    """A quiz being put together: title, requested size and selection."""

    title: str
    requested: int
    description: Optional[str] = None
    selected: list[str] = field(default_factory=list)

    def sample(
        self,
        pool: Sequence[Question],
        *,
        rng: Optional[random.Random] = None,
    ) -> list[str]:
        """Preselect ``min(requested, len(pool))`` random questions."""

        if not pool:
            raise EmptyPoolError()
        shuffled = list(pool)
        (rng or random.Random()).shuffle(shuffled)
        take = max(0, min(self.requested, len(shuffled)))
        self.selected = list(
            dict.fromkeys(question.id for question in shuffled[:take])
        )
        return list(self.selected)

    def toggle(self, question_id: str) -> bool:
        """Flip selection of ``question_id``; return whether it is selected."""

        if question_id in self.selected:
            self.selected.remove(question_id)
            return False
        self.selected.append(question_id)
        return True

    def is_selected(self, question_id: str) -> bool:
        return question_id in self.selected

    def submit(
        self,
        *,
        today: Optional[date] = None,
        id_factory: Callable[[], str] = new_quiz_id,
    ) -> Quiz:
        validate_quiz_submission(self.title, self.selected)
        count = len(self.selected)
        description = self.description or f"{count} questions"
        return Quiz(
            id=id_factory(),
            title=self.title.strip(),
            description=description,
            created_at=format_created_at(today or date.today()),
            questions=tuple(self.selected),
        )


def assemble(
    title: str,
    count: int,
    pool: Sequence[Question],
    *,
    rng: Optional[random.Random] = None,
    description: Optional[str] = None,
    today: Optional[date] = None,
) -> Quiz:
    """Build a quiz of up to ``count`` distinct questions drawn from ``pool``.

    Raises ``EmptyPoolError`` when ``pool`` is empty, and ``ValidationError``
    when ``title`` is blank or nothing ends up selected (``count <= 0``).
    """

    draft = QuizDraft(title=title, requested=count, description=description)
    draft.sample(pool, rng=rng)
    return draft.submit(today=today)
