from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

ROOT = TESTS_DIR.parent
for extra in (ROOT / "src",):
    path_str = str(extra)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from fixtures import WorkspaceBuilder, make_question  # noqa: E402

from quiz_author.bank import (  # noqa: E402
    MemoryStorage,
    Question,
    QuestionStore,
    QuizStore,
)


@pytest.fixture(autouse=True)
def _isolated_workspace(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[Path]:
    """Keep every test away from the real ~/.quiz-author directory."""

    home = tmp_path / "quiz-home"
    monkeypatch.setenv("QUIZ_AUTHOR_DATA_HOME", str(home))
    for key in (
        "QUIZ_AUTHOR_CONFIG",
        "QUIZ_AUTHOR_STORAGE_DIR",
        "QUIZ_AUTHOR_LOG_LEVEL",
        "QUIZ_AUTHOR_DEFAULT_COUNT",
    ):
        monkeypatch.delenv(key, raising=False)
    yield home


@pytest.fixture
def workspace(tmp_path: Path) -> WorkspaceBuilder:
    """Provide a helper bound to pytest's per-test tmp directory."""

    return WorkspaceBuilder(tmp_path)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def question_store(storage: MemoryStorage) -> QuestionStore:
    return QuestionStore(storage)


@pytest.fixture
def quiz_store(storage: MemoryStorage) -> QuizStore:
    return QuizStore(storage)


@pytest.fixture
def question_factory() -> Callable[..., Question]:
    return make_question


@pytest.fixture
def pool() -> list[Question]:
    return [
        make_question("q1", "What is 2+2?", category="Math", correct=1),
        make_question("q2", "Capital of Italy?", category="Geography"),
        make_question("q3", "H2O is?", category="Science", correct=2),
    ]
